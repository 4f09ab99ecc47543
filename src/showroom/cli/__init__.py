"""Command-line interface for showroom."""
