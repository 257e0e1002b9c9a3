"""Affine knowledge-base adapter for LLM tool-calling loops."""

__version__ = "0.1.0"
