"""Plume: heuristic AI-likelihood detection for French text."""

__version__ = "1.0.0"
