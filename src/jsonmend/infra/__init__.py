"""Repair grammar, its errors and logging setup."""
