"""Toolkit module."""

from .toolkit import IToolkit, Toolkit

__all__ = ["IToolkit", "Toolkit"]
