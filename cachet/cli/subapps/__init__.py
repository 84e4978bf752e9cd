"""Typer sub-applications, one per Cachet resource."""
