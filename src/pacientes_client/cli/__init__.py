"""Comandos de la CLI (Typer + Rich)."""
