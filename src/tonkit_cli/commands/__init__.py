"""Command groups of the tonkit CLI."""

from . import dap, lsp

__all__ = ["dap", "lsp"]
