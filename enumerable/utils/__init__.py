"""Small helpers shared by the outer surfaces (DSL, CLI)."""
