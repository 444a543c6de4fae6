from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
import logging

from formats import FormatRegistry, default_registry
from .diagnostics import Diagnostic, DiagnosticSink
from .exceptions import InvalidSchema, KeywordMismatch, TypeMismatch, FormatMismatch
from .types import (
    SchemaType, COERCIBLE_TYPES,
    is_list_like, is_mapping_like, is_native_int, is_numeric,
    is_stringified_bool, is_stringified_int,
)

logger = logging.getLogger(__name__)


def _matches_object(value: Any) -> bool:
    return is_mapping_like(value)


def _matches_array(value: Any) -> bool:
    return is_list_like(value)


def _matches_boolean(value: Any) -> bool:
    return isinstance(value, bool) or is_stringified_bool(value)


def _matches_number(value: Any) -> bool:
    return is_numeric(value)


def _matches_integer(value: Any) -> bool:
    # floats are never integers, even 5.0
    return is_native_int(value) or is_stringified_int(value)


def _matches_string(value: Any) -> bool:
    return isinstance(value, str)


_MATCHERS: Dict[SchemaType, Callable[[Any], bool]] = {
    SchemaType.OBJECT: _matches_object,
    SchemaType.ARRAY: _matches_array,
    SchemaType.BOOLEAN: _matches_boolean,
    SchemaType.NUMBER: _matches_number,
    SchemaType.INTEGER: _matches_integer,
    SchemaType.STRING: _matches_string,
}


@dataclass
class TypeCheckResult:
    ok: bool
    error: Optional[KeywordMismatch] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)


class TypeKeyword:
    """
    Leaf evaluator for the `type` and `format` schema keywords.

    Usage:
        keyword = TypeKeyword(registry, sink=LoggingSink())
        keyword.validate("42", "integer", "int32", path="/limit")

    Stage one matches the value's runtime shape against the declared type
    (strings are accepted for boolean/number/integer). Stage two runs the
    registered format validator, if any. Unregistered formats pass.
    """

    def __init__(self, registry: Optional[FormatRegistry] = None,
                 sink: Optional[DiagnosticSink] = None):
        self.registry = registry if registry is not None else default_registry()
        self.sink = sink

    def validate(self, value: Any, type_name: str, format_name: Optional[str] = None,
                 path: Optional[str] = None) -> List[Diagnostic]:
        """
        Raises InvalidSchema, TypeMismatch, FormatMismatch or
        FormatValidatorUnresolvable. Returns the coercion diagnostics observed.
        """
        schema_type = SchemaType.parse(type_name)
        if schema_type is None:
            raise InvalidSchema.because_type_is_not_known(type_name)

        diagnostics: List[Diagnostic] = []
        if not _MATCHERS[schema_type](value):
            raise TypeMismatch.because_type_does_not_match(schema_type.value, value, path=path)

        if schema_type in COERCIBLE_TYPES and isinstance(value, str):
            diagnostic = Diagnostic(declared_type=schema_type.value, value=value, path=path)
            diagnostics.append(diagnostic)
            self._emit(diagnostic)

        # 2. format
        if not format_name:
            return diagnostics

        predicate = self.registry.lookup(schema_type.value, format_name)
        if predicate is None:
            return diagnostics

        if not predicate(value):
            err = FormatMismatch.from_format(format_name, value, schema_type.value, path=path)
            err.diagnostics = diagnostics
            raise err
        return diagnostics

    def check(self, value: Any, type_name: str, format_name: Optional[str] = None,
              path: Optional[str] = None) -> TypeCheckResult:
        """Like validate(), but data mismatches come back as a result value."""
        try:
            diagnostics = self.validate(value, type_name, format_name, path=path)
        except KeywordMismatch as e:
            return TypeCheckResult(ok=False, error=e, diagnostics=list(e.diagnostics))
        return TypeCheckResult(ok=True, diagnostics=diagnostics)

    def _emit(self, diagnostic: Diagnostic) -> None:
        if self.sink is None:
            return
        try:
            self.sink.emit(diagnostic)
        except Exception:
            logger.warning("Diagnostic sink %r failed", self.sink, exc_info=True)


_shared: Optional[TypeKeyword] = None


def validate_type(value: Any, type_name: str, format_name: Optional[str] = None,
                  path: Optional[str] = None) -> List[Diagnostic]:
    """
    validate() on a shared evaluator bound to the process-wide registry.
    The first call freezes that registry.
    """
    global _shared
    registry = default_registry()
    if _shared is None or _shared.registry is not registry:
        registry.freeze()
        _shared = TypeKeyword(registry)
    return _shared.validate(value, type_name, format_name, path=path)
