"""
evolution_engine
================

Generational evolutionary optimisation decoupled from the genetic
representation, with a single-objective GA and SPEA2 as pluggable strategies.
"""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Return the installed package version or '0.0.0' when unavailable."""
    try:
        return version("evolution_engine")
    except PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
