"""Entry point for ``python -m devcli``."""

from devcli.cli import main

if __name__ == "__main__":
    main()
