"""Typer-based command line interface for the Cachet client."""
