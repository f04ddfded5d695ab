"""Utility functions for JSON Codable."""

from .date_patterns import CompiledPattern, compile_pattern
from .validation import ValidationUtils

__all__ = ["CompiledPattern", "compile_pattern", "ValidationUtils"]
