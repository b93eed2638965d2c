"""Command line interface for the emoji cache."""
