"""Schemas of external API responses."""
