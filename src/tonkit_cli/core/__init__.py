"""Core helpers for the tonkit CLI."""
