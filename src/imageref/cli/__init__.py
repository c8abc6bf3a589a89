"""Command-line interface for imageref."""
