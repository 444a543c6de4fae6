"""
Public API for the keywords package.

Import from here everywhere else, so you can refactor internals freely:
    from keywords import (
        TypeKeyword, TypeCheckResult, validate_type,
        SchemaType,
        InvalidSchema, TypeMismatch, FormatMismatch, FormatValidatorUnresolvable,
        Diagnostic, DiagnosticSink, LoggingSink, CollectingSink,
    )
"""
from .types import SchemaType
from .exceptions import (
    SchemaError, InvalidSchema,
    KeywordMismatch, TypeMismatch, FormatMismatch,
    FormatValidatorUnresolvable,
)
from .diagnostics import Diagnostic, DiagnosticSink, LoggingSink, CollectingSink
from .type_keyword import TypeKeyword, TypeCheckResult, validate_type

__all__ = [
    # types
    "SchemaType",
    # errors
    "SchemaError", "InvalidSchema",
    "KeywordMismatch", "TypeMismatch", "FormatMismatch",
    "FormatValidatorUnresolvable",
    # diagnostics
    "Diagnostic", "DiagnosticSink", "LoggingSink", "CollectingSink",
    # evaluator
    "TypeKeyword", "TypeCheckResult", "validate_type",
]
