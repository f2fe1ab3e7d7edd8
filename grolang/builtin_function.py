from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from grolang.errors import ErrorKind, LangError
from grolang.types import ClassVal, accepts, class_of


@dataclass(frozen=True)
class BuiltinFunction:
    name: str
    input_types: Tuple[ClassVal, ...]
    output_type: Optional[ClassVal]
    fn: Callable[[List[Any]], Any] = field(compare=False)

    @property
    def arity(self) -> int:
        return len(self.input_types)

    def signature(self) -> str:
        return ', '.join(t.name for t in self.input_types)

    def call(self, args: List[Any]) -> Any:
        """Check the evaluated arguments against the signature, then run."""
        if len(args) != self.arity:
            raise LangError(ErrorKind.WRONG_ARGUMENTS, self.name, self.signature(),
                            ', '.join(class_of(a).name for a in args))
        for arg, expected in zip(args, self.input_types):
            if not accepts(expected, class_of(arg), any_matches=True):
                raise LangError(ErrorKind.WRONG_ARGUMENTS, self.name, self.signature(),
                                ', '.join(class_of(a).name for a in args))
        return self.fn(args)

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
