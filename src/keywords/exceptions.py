from __future__ import annotations
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from formats.registry import FormatValidatorUnresolvable

if TYPE_CHECKING:
    from .diagnostics import Diagnostic


def _type_label(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__


class SchemaError(ValueError):
    """The schema itself is wrong; never a problem with the data."""


class InvalidSchema(SchemaError):
    def __init__(self, message: str, type_name: Any = None):
        super().__init__(message)
        self.type_name = type_name

    @classmethod
    def because_type_is_not_known(cls, type_name: Any) -> "InvalidSchema":
        return cls(f"Type '{type_name}' is unknown", type_name=type_name)


class KeywordMismatch(ValueError):
    """
    A value failed a keyword check.

    Attributes:
      keyword      -- the failing keyword ("type" or "format")
      data         -- the offending value
      path         -- caller-supplied location of the value, if any
      diagnostics  -- events observed before the failure
    """
    keyword: str = ""

    def __init__(self, message: str, data: Any = None, expected_type: Optional[str] = None,
                 path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.data = data
        self.expected_type = expected_type
        self.path = path
        self.diagnostics: List["Diagnostic"] = []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "message": self.message,
            "data": self.data,
            "expected_type": self.expected_type,
            "path": self.path,
        }


class TypeMismatch(KeywordMismatch):
    keyword = "type"

    @classmethod
    def because_type_does_not_match(cls, expected: str, value: Any,
                                    path: Optional[str] = None) -> "TypeMismatch":
        message = f"Value expected to be '{expected}', but '{_type_label(value)}' given."
        return cls(message, data=value, expected_type=expected, path=path)


class FormatMismatch(KeywordMismatch):
    keyword = "format"

    def __init__(self, message: str, data: Any = None, expected_type: Optional[str] = None,
                 path: Optional[str] = None, format_name: Optional[str] = None):
        super().__init__(message, data=data, expected_type=expected_type, path=path)
        self.format_name = format_name

    @classmethod
    def from_format(cls, format_name: str, value: Any, type_name: str,
                    path: Optional[str] = None) -> "FormatMismatch":
        message = f"Value '{value}' does not match format {format_name} of type {type_name}"
        return cls(message, data=value, expected_type=type_name, path=path, format_name=format_name)

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["format"] = self.format_name
        return out

