"""Main entry point for cuedeck."""

from cuedeck.cli.main import cli

if __name__ == "__main__":
    cli()
