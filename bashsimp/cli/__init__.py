"""Command line interface for the simplifier."""
