"""Command line interface for tonkit."""
