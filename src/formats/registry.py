from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union
from pathlib import Path
import importlib
import logging
import threading

from .builtin import BUILTIN_FORMATS
from .loader import load_format_plugins

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]
# A callable predicate, a class whose instances are predicates, or "pkg.mod:attr".
FormatEntry = Union[Predicate, type, str]
FormatKey = Tuple[str, str]


class FormatValidatorUnresolvable(RuntimeError):
    """A registered validator identifier could not be turned into a callable."""

    def __init__(self, message: str, identifier: str, reason: Optional[str] = None):
        super().__init__(message)
        self.identifier = identifier
        self.reason = reason

    @classmethod
    def because_not_loaded(cls, identifier: str, reason: str) -> "FormatValidatorUnresolvable":
        return cls(f"'{identifier}' does not loaded ({reason})", identifier=identifier, reason=reason)


def _key(type_name: Any, format_name: Any) -> FormatKey:
    # SchemaType members are str subclasses; normalise to their plain value
    t = getattr(type_name, "value", type_name)
    if not isinstance(t, str) or not t:
        raise ValueError(f"Format type must be a non-empty string, got: {type_name!r}")
    if not isinstance(format_name, str) or not format_name:
        raise ValueError(f"Format name must be a non-empty string, got: {format_name!r}")
    return t, format_name


class FormatRegistry:
    """
    Lookup table (type, format name) -> format validator, with:
      - Built-in formats (string/date-time, integer/int32, ...)
      - Optional extra_formats injection (tests, embedding apps)
      - Optional YAML plugin files naming importable validators

    Identifier entries are imported on first lookup and cached; the cache is
    lock-guarded so concurrent first use loads each unit once.
    """

    def __init__(self,
                 extra_formats: Optional[Dict[FormatKey, FormatEntry]] = None,
                 plugins_dir: Optional[str | Path] = None,
                 include_builtins: bool = True):
        self._entries: Dict[FormatKey, FormatEntry] = {}
        self._resolved: Dict[FormatKey, Predicate] = {}
        self._failed: Dict[FormatKey, FormatValidatorUnresolvable] = {}
        self._lock = threading.Lock()
        self._frozen = False

        # 1) built-ins
        if include_builtins:
            for (t, name), entry in BUILTIN_FORMATS.items():
                self.register(t, name, entry)

        # 2) caller-provided extras (override/extend)
        if extra_formats:
            for (t, name), entry in extra_formats.items():
                self.register(t, name, entry)

        # 3) YAML plugins (override/extend)
        for (t, name), identifier in load_format_plugins(plugins_dir).items():
            self.register(t, name, identifier)

    # ----- population -----

    def register(self, type_name: str, format_name: str, entry: FormatEntry) -> None:
        if self._frozen:
            raise RuntimeError("Format registry is frozen; register formats before validation starts.")
        key = _key(type_name, format_name)
        if isinstance(entry, str):
            if not entry.strip():
                raise ValueError(f"Empty validator identifier for {key[0]}/{key[1]}")
        elif not callable(entry):
            raise TypeError(f"Format validator for {key[0]}/{key[1]} must be callable or an import path")

        if key in self._entries:
            logger.warning("Overriding format validator for %s/%s", *key)
        with self._lock:
            self._entries[key] = entry
            self._resolved.pop(key, None)
            self._failed.pop(key, None)
        logger.debug("Registered format %s/%s -> %r", key[0], key[1], entry)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ----- lookup -----

    def get_entry(self, type_name: str, format_name: str) -> Optional[FormatEntry]:
        return self._entries.get(_key(type_name, format_name))

    def lookup(self, type_name: str, format_name: str) -> Optional[Predicate]:
        """
        Resolved predicate for (type, format), or None when nothing is registered.
        Raises FormatValidatorUnresolvable if an identifier entry cannot be loaded.
        """
        key = _key(type_name, format_name)
        resolved = self._resolved.get(key)
        if resolved is not None:
            return resolved
        entry = self._entries.get(key)
        if entry is None:
            return None
        if callable(entry) and not isinstance(entry, type):
            return entry

        with self._lock:
            failed = self._failed.get(key)
            if failed is not None:
                raise failed
            resolved = self._resolved.get(key)  # another thread may have won
            if resolved is None:
                try:
                    resolved = _resolve(entry)
                except FormatValidatorUnresolvable as e:
                    # a broken unit is loaded once, then reported from the cache
                    self._failed[key] = e
                    logger.error("Cannot resolve format %s/%s: %s", key[0], key[1], e)
                    raise
                self._resolved[key] = resolved
                logger.debug("Resolved format %s/%s -> %r", key[0], key[1], resolved)
        return resolved

    def formats(self, type_name: Optional[str] = None) -> List[FormatKey]:
        keys: Iterable[FormatKey] = self._entries.keys()
        if type_name is not None:
            t = getattr(type_name, "value", type_name)
            keys = [k for k in keys if k[0] == t]
        return sorted(keys)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        try:
            return _key(*key) in self._entries
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._entries)


# ----- identifier resolution -----

def _import_attr(identifier: str) -> Any:
    if ":" in identifier:
        module_name, _, attr_path = identifier.partition(":")
    else:
        module_name, _, attr_path = identifier.rpartition(".")
    if not module_name or not attr_path:
        raise FormatValidatorUnresolvable.because_not_loaded(identifier, "expected 'module:attr'")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise FormatValidatorUnresolvable.because_not_loaded(identifier, str(e)) from e
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise FormatValidatorUnresolvable.because_not_loaded(
                identifier, f"module '{module_name}' has no attribute '{attr_path}'"
            ) from e
    return obj


def _resolve(entry: FormatEntry) -> Predicate:
    identifier = entry if isinstance(entry, str) else f"{entry.__module__}.{entry.__qualname__}"
    obj = _import_attr(entry.strip()) if isinstance(entry, str) else entry
    if isinstance(obj, type):
        try:
            obj = obj()
        except Exception as e:
            raise FormatValidatorUnresolvable.because_not_loaded(identifier, f"cannot instantiate: {e}") from e
    if not callable(obj):
        raise FormatValidatorUnresolvable.because_not_loaded(identifier, "not callable")
    return obj


# ----- process-wide default -----

_default: Optional[FormatRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> FormatRegistry:
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = FormatRegistry()
    return _default


def register_format(type_name: str, format_name: str, entry: FormatEntry) -> None:
    """
    Register on the process-wide registry. Startup only: the first
    validate_type() call freezes the default registry.
    """
    default_registry().register(type_name, format_name, entry)


def reset_default_registry() -> None:
    global _default
    with _default_lock:
        _default = None
