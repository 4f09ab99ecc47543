"""CLI commands for showroom."""
