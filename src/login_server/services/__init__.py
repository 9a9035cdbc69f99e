"""Auxiliary data served alongside login."""
