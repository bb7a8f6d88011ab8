"""Main entry point for the fountainkit CLI when run as a module."""

from fountainkit.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
