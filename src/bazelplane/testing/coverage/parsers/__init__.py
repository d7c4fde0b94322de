"""Coverage report parsers."""

from .lcov import parse_lcov

__all__ = ["parse_lcov"]
