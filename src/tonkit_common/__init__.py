"""Shared helpers for the tonkit packages."""
