"""Shared helpers used across the regbridge packages."""
