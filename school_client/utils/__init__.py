"""Shared helpers (configuration, logging)."""
