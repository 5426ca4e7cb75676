"""Duplicate transaction detection for wallet imports."""
