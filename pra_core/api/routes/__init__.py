"""API routers."""

from . import control, observability, pipeline

__all__ = ["control", "observability", "pipeline"]
