from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

from grolang.builtin_function import BuiltinFunction
from grolang.errors import ErrorKind, LangError
from grolang.types import BUILTIN_CLASSES, CLASS, ClassVal, SymbolVal, accepts, class_of


@dataclass(frozen=True)
class Symbol:
    """Metadata of a declared binding: its name, declared class and mutability."""
    name: str
    declared_type: ClassVal
    is_mutable: bool = False


class Environment:
    """Symbol table and value store for one evaluation session.

    Names map to `Symbol` records and symbols map to their current value.
    A name is declared at most once; an immutable symbol takes exactly one
    value. Built-in classes then built-in functions are registered when the
    environment is created.
    """
    def __init__(self, reader: Optional[Callable[[], str]] = None,
                 writer: Optional[Callable[[str], None]] = None,
                 functions: Optional[Iterable[BuiltinFunction]] = None):
        self.symbols: Dict[str, Symbol] = {}
        self.values: Dict[Symbol, Any] = {}
        self.register_classes(BUILTIN_CLASSES)
        if functions is None:
            # imported here, std builds its functions against the class table
            from grolang.std import builtin_functions
            functions = builtin_functions(reader=reader, writer=writer)
        self.register_functions(functions)

    # Built-in registry

    def register_classes(self, classes: Iterable[ClassVal]):
        for clazz in classes:
            self._register_builtin(clazz.name, clazz)

    def register_functions(self, functions: Iterable[BuiltinFunction]):
        for function in functions:
            for clazz in function.input_types + ((function.output_type,) if function.output_type else ()):
                if self.lookup_class(clazz.name) != clazz:
                    raise LangError(ErrorKind.UNKNOWN_CLASS, clazz.name)
            self._register_builtin(function.name, function)

    def _register_builtin(self, name: str, value: Any):
        symbol = self.symbols.get(name)
        if symbol is not None:
            # seeding the same builtin twice is a no-op
            if self.values.get(symbol) == value:
                return
            raise LangError(ErrorKind.ALREADY_DEFINED, name)
        symbol = Symbol(name, class_of(value), is_mutable=False)
        self.symbols[name] = symbol
        self.values[symbol] = value

    def lookup_class(self, type_name: str) -> Optional[ClassVal]:
        symbol = self.symbols.get(type_name)
        if symbol is None:
            return None
        value = self.values.get(symbol)
        return value if isinstance(value, ClassVal) else None

    # Declaration and assignment

    def declare(self, name: str, type_name: str, is_mutable: bool) -> SymbolVal:
        if name in self.symbols:
            raise LangError(ErrorKind.ALREADY_DEFINED, name)
        type_symbol = self.symbols.get(type_name)
        if type_symbol is None or type_symbol not in self.values:
            raise LangError(ErrorKind.UNKNOWN_TYPE, type_name)
        clazz = self.values[type_symbol]
        if class_of(clazz) != CLASS:
            raise LangError(ErrorKind.UNKNOWN_CLASS, type_name)
        self.symbols[name] = Symbol(name, clazz, is_mutable)
        return SymbolVal(name)

    def assign(self, name: str, value: Any) -> Any:
        symbol = self.get_symbol(name)
        if symbol in self.values and not symbol.is_mutable:
            raise LangError(ErrorKind.NOT_MUTABLE, name)
        actual = class_of(value)
        if not accepts(symbol.declared_type, actual):
            raise LangError(ErrorKind.NOT_EXPECTED_TYPE, name, symbol.declared_type.name, actual.name)
        self.values[symbol] = value
        return value

    def declare_and_assign(self, name: str, value: Any, is_mutable: bool = False) -> Any:
        if name in self.symbols:
            raise LangError(ErrorKind.ALREADY_DEFINED, name)
        self.declare(name, class_of(value).name, is_mutable)
        return self.assign(name, value)

    # Lookup

    def is_defined(self, name: str) -> bool:
        return name in self.symbols

    def get_symbol(self, name: str) -> Symbol:
        symbol = self.symbols.get(name)
        if symbol is None:
            raise LangError(ErrorKind.NOT_DEFINED, name)
        return symbol

    def get(self, name: str) -> Any:
        symbol = self.get_symbol(name)
        if symbol not in self.values:
            raise LangError(ErrorKind.NOT_SET, name)
        return self.values[symbol]

    def get_function(self, name: str) -> BuiltinFunction:
        value = self.get(name)
        if not isinstance(value, BuiltinFunction):
            raise LangError(ErrorKind.NOT_EXPECTED_TYPE, name, 'Function', class_of(value).name)
        return value
