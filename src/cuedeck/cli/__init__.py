"""Command-line interface for cuedeck."""
