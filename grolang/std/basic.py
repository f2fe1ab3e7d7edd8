import builtins
from typing import Any, Callable, List, Optional

from grolang.builtin_function import BuiltinFunction
from grolang.types import ANY, CLASS, NULL, STR, StrVal, class_of, to_display, to_string


def builtin_functions(reader: Optional[Callable[[], str]] = None,
                      writer: Optional[Callable[[str], None]] = None) -> List[BuiltinFunction]:
    """Build the built-in function table.

    `reader` supplies one line of input to `read()` and `writer` receives
    the text produced by `print()`. They default to the console.
    """
    read_line = reader or builtins.input
    write = writer or builtins.print

    def std_print(args: List[Any]) -> Any:
        write(to_display(args[0]))
        return NULL

    def std_read(args: List[Any]) -> Any:
        try:
            return StrVal(read_line())
        except EOFError:
            return StrVal('')

    def std_type(args: List[Any]) -> Any:
        return class_of(args[0])

    def std_str(args: List[Any]) -> Any:
        return StrVal(to_string(args[0]))

    return [
        BuiltinFunction('print', (ANY,), ANY, std_print),
        BuiltinFunction('read', (), STR, std_read),
        BuiltinFunction('type', (ANY,), CLASS, std_type),
        BuiltinFunction('str', (ANY,), STR, std_str),
    ]
