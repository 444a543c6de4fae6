"""
Textual number patterns shared by the type check (keywords.types) and the
numeric formats, so both stages accept the same strings. ASCII digits only;
match with fullmatch().
"""
import re

INT_RE = re.compile(r"[-+]?[0-9]+")
NUMERIC_RE = re.compile(r"\s*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?\s*")
