"""Entry point for 'python -m praytogether' command."""

from praytogether.cli import main

if __name__ == "__main__":
    main()
