"""Atelier application package."""
