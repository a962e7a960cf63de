"""Terminal output helpers for the CLI."""
