"""Typer command-line client for the river water-quality advisory service."""
