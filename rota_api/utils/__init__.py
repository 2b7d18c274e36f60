"""Shared helpers (metrics)."""
