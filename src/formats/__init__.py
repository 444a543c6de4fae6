"""
Public API for the formats package.
Usage:
    from formats import FormatRegistry, register_format
"""
from .registry import (
    FormatRegistry, FormatValidatorUnresolvable,
    default_registry, register_format, reset_default_registry,
)
from .loader import load_format_plugins
from .builtin import BUILTIN_FORMATS

__all__ = [
    "FormatRegistry", "FormatValidatorUnresolvable",
    "default_registry", "register_format", "reset_default_registry",
    "load_format_plugins", "BUILTIN_FORMATS",
]
