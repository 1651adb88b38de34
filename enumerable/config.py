"""Configuration classes for enumerable components."""

from dataclasses import dataclass


@dataclass
class EnumerationConfig:
    """Defaults for guarded enumeration and the command-line interface."""

    # Wall-clock budget for enumerate_with_deadline when none is given
    default_deadline_seconds: float = 10.0

    # Ceiling applied by `enumerable list` when --below is not given
    default_ceiling: int = 1_000_000

    # Values shown per type by `enumerable inspect --detail`
    preview_limit: int = 5

    # Name prefix of deadline worker threads
    worker_thread_prefix: str = "enumerable-deadline"

    def __post_init__(self) -> None:
        if self.default_deadline_seconds <= 0:
            raise ValueError(
                f"default_deadline_seconds={self.default_deadline_seconds} "
                "must be positive"
            )
        if self.default_ceiling < 0:
            raise ValueError(
                f"default_ceiling={self.default_ceiling} must be non-negative"
            )
        if self.preview_limit < 0:
            raise ValueError(f"preview_limit={self.preview_limit} must be non-negative")


# Global configuration instance
ENUMERATION_CONFIG = EnumerationConfig()
