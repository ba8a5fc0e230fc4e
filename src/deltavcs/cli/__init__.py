"""Command-line interface for deltavcs."""
