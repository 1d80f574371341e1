"""Merge-up planning and major release line resolution for supported modules."""

__version__ = "0.3.0"
