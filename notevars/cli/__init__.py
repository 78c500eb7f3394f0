"""Command-line interface for notevars."""
