"""Module entrypoint: ``python -m enumerable``."""

from enumerable.cli import main

if __name__ == "__main__":
    main()
