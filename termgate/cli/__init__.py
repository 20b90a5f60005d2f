"""Command line interface for termgate."""
