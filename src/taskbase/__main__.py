"""Entry point for 'python -m taskbase' command."""

from taskbase.cli import main

if __name__ == "__main__":
    main()
