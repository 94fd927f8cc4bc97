"""Entry point for running buildprofile as a module."""

from .cli import main

if __name__ == "__main__":
    main()
