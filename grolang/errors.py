from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

from grolang import messages


class ErrorKind(Enum):
    """Closed set of failures raised by the parser and the evaluator."""
    SYNTAX_ERROR = 'syntax_error'
    UNKNOWN_TOKEN = 'unknown_token'
    TYPE_ERROR = 'type_error'
    TYPE_NOT_INFERRED = 'type_not_inferred'
    ALREADY_DEFINED = 'already_defined'
    NOT_DEFINED = 'not_defined'
    NOT_SET = 'not_set'
    NOT_MUTABLE = 'not_mutable'
    NOT_EXPECTED_TYPE = 'not_expected_type'
    UNKNOWN_TYPE = 'unknown_type'
    UNKNOWN_CLASS = 'unknown_class'
    WRONG_ARGUMENTS = 'wrong_arguments'


@dataclass(frozen=True)
class ErrorVal:
    """Represents a groLang error value.

    An error carries its kind and the positional arguments naming the
    offending identifiers or types. The human-readable text is looked up
    in the message catalog only when `message` is read.
    """
    kind: ErrorKind
    args: Tuple[Any, ...] = ()

    @property
    def message(self) -> str:
        return messages.format_message(self.kind.value, self.args)

    def __repr__(self) -> str:
        return f"Error(kind={self.kind.name}, args={self.args!r})"


class LangError(Exception):
    """Exception type used to propagate groLang failures."""
    def __init__(self, kind: ErrorKind, *args: Any):
        self.err = ErrorVal(kind, tuple(str(a) for a in args))
        super().__init__(kind, *self.err.args)

    def __str__(self) -> str:
        return self.err.message

    @property
    def kind(self) -> ErrorKind:
        return self.err.kind

    @property
    def arguments(self) -> Tuple[Any, ...]:
        return self.err.args
