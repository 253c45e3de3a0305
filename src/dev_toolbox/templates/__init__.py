"""Packaged file templates."""
