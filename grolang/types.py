"""Runtime values and classes for groLang.

This module defines the runtime value model used by the evaluator. Every
value is an immutable tagged record; its class is itself a value
(`ClassVal`) so that types can be passed around like any other datum.
The class `Class` is its own class, which is handled here as a fixed
point rather than by recursion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from .errors import ErrorVal

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

STRING_NULL = 'null'

# Built-in class names
TYPE_ANY = 'Any'
TYPE_CLASS = 'Class'
TYPE_FUNCTION = 'Function'
TYPE_SYMBOL = 'Symbol'
TYPE_INT = 'Int'
TYPE_FLOAT = 'Float'
TYPE_BOOL = 'Bool'
TYPE_STR = 'Str'
TYPE_ERROR = 'Error'


@dataclass(frozen=True)
class ClassVal:
    """A named type tag, usable both as a type and as a value."""
    name: str

    def __repr__(self) -> str:
        return f"Class({self.name})"


ANY = ClassVal(TYPE_ANY)
CLASS = ClassVal(TYPE_CLASS)
FUNCTION = ClassVal(TYPE_FUNCTION)
SYMBOL = ClassVal(TYPE_SYMBOL)
INT = ClassVal(TYPE_INT)
FLOAT = ClassVal(TYPE_FLOAT)
BOOL = ClassVal(TYPE_BOOL)
STR = ClassVal(TYPE_STR)
ERROR = ClassVal(TYPE_ERROR)

# Registration order matters: Class comes first, functions come later.
BUILTIN_CLASSES: Tuple[ClassVal, ...] = (CLASS, ANY, FUNCTION, SYMBOL, INT, FLOAT, BOOL, STR, ERROR)


class NullVal:
    """Marker object for the groLang `null` value."""
    def __eq__(self, other: Any) -> bool:
        return isinstance(other, NullVal)

    def __hash__(self) -> int:
        return hash(NullVal)

    def __repr__(self) -> str:
        return 'Null'


NULL = NullVal()


@dataclass(frozen=True)
class IntVal:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"IntVal expects int, got {type(self.value).__name__}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise OverflowError(f"{self.value} does not fit in 64 bits")


@dataclass(frozen=True)
class FloatVal:
    value: float


@dataclass(frozen=True)
class BoolVal:
    value: bool


@dataclass(frozen=True)
class StrVal:
    value: str


@dataclass(frozen=True)
class SymbolVal:
    """A quoted name (`'x`). It is data, not a reference to a binding."""
    value: str


def class_of(value: Any) -> ClassVal:
    """Return the groLang class of a runtime value."""
    # imported here, builtin_function depends on this module
    from .builtin_function import BuiltinFunction
    if isinstance(value, NullVal):
        return ANY
    if isinstance(value, IntVal):
        return INT
    if isinstance(value, FloatVal):
        return FLOAT
    if isinstance(value, BoolVal):
        return BOOL
    if isinstance(value, StrVal):
        return STR
    if isinstance(value, SymbolVal):
        return SYMBOL
    if isinstance(value, ClassVal):
        return CLASS
    if isinstance(value, BuiltinFunction):
        return FUNCTION
    if isinstance(value, ErrorVal):
        return ERROR
    raise TypeError(f"not a groLang value: {value!r}")


def format_float(value: float) -> str:
    # Python's repr is the shortest form that round-trips
    return repr(value)


_ESCAPES = {'\\': '\\\\', '"': '\\"', '\n': '\\n', '\r': '\\r', '\t': '\\t'}


def quote_string(text: str) -> str:
    """Double-quote `text`, escaping it so that it reads back as a string literal."""
    return '"' + ''.join(_ESCAPES.get(c, c) for c in text) + '"'


def to_string(value: Any) -> str:
    """Convert a groLang value to its printable form.

    Strings are double-quoted and symbols carry their leading quote so that
    the printable form of a literal reads back as the same literal.
    """
    from .builtin_function import BuiltinFunction
    if isinstance(value, NullVal):
        return STRING_NULL
    if isinstance(value, BoolVal):
        return 'true' if value.value else 'false'
    if isinstance(value, IntVal):
        return str(value.value)
    if isinstance(value, FloatVal):
        return format_float(value.value)
    if isinstance(value, StrVal):
        return quote_string(value.value)
    if isinstance(value, SymbolVal):
        return "'" + value.value
    if isinstance(value, ClassVal):
        return f"Class({value.name})"
    if isinstance(value, BuiltinFunction):
        return f"Function(name={value.name})"
    if isinstance(value, ErrorVal):
        return f"Error({value.kind.name}: {value.message})"
    raise TypeError(f"not a groLang value: {value!r}")


def to_display(value: Any) -> str:
    """Like `to_string` but strings are shown without their quotes."""
    if isinstance(value, StrVal):
        return value.value
    return to_string(value)


def accepts(declared: ClassVal, actual: ClassVal, any_matches: bool = False) -> bool:
    """Check whether a value of class `actual` fits a slot declared `declared`.

    Class equality is required unless `any_matches` is set and the slot is
    declared `Any`, in which case every class fits.
    """
    if any_matches and declared == ANY:
        return True
    return declared == actual


def from_python(value: Any) -> Any:
    """Wrap a native Python value into the matching groLang value."""
    if value is None:
        return NULL
    if isinstance(value, bool):
        return BoolVal(value)
    if isinstance(value, int):
        return IntVal(value)
    if isinstance(value, float):
        return FloatVal(value)
    if isinstance(value, str):
        return StrVal(value)
    raise TypeError(f"cannot convert {type(value).__name__} to a groLang value")

