"""Shared setup helpers."""
