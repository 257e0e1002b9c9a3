"""Text presenters for tool results."""

from affine_kb.formatters.presenter import render


__all__ = ["render"]
