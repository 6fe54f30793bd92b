"""Package entry point for ``python -m vconcat``."""

from vconcat.cli import main

if __name__ == "__main__":
    main()
