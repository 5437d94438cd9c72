"""Interfaces layer - presentation (CLI)."""
