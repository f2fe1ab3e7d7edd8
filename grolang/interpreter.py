"""Evaluator for groLang.

`evaluate` walks one AST node against an `Environment` and returns a
runtime value, raising `LangError` on failure. A failure inside a
sub-expression aborts the whole statement; bindings made by earlier
statements are left as they were.

`Interpreter` is an evaluation session: one environment, the parser in
front of it, and the optional debug trace.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, List, Optional, Tuple

from .ast import Assignment, Block, Call, Declaration, Identifier, Literal, Node, debug_string
from .environment import Environment
from .errors import LangError
from .parser import assignment_target, parse
from .types import NULL, NullVal, class_of, to_string

Tracer = Callable[[str, int], None]


def _no_trace(msg: str, level: int) -> None:
    pass


def evaluate(node: Node, env: Environment, trace: Optional[Tracer] = None) -> Any:
    """Evaluate an AST node to a groLang value."""
    trace = trace or _no_trace
    if isinstance(node, Literal):
        if node.value is None or isinstance(node.value, NullVal):
            return NULL
        return node.value
    if isinstance(node, Identifier):
        return env.get(node.name)
    if isinstance(node, Declaration):
        result = env.declare(node.name, node.type_name, node.is_mutable)
        trace(f"declare {node.name}: {node.type_name} ({'var' if node.is_mutable else 'val'})", 2)
        return result
    if isinstance(node, Assignment):
        value = evaluate(node.value, env, trace)
        env.assign(node.name, value)
        trace(f"assign {node.name} = {to_string(value)}", 2)
        return value
    if isinstance(node, Block):
        result: Any = NULL
        for statement in node.statements:
            result = evaluate(statement, env, trace)
        return result
    if isinstance(node, Call):
        args: List[Any] = [evaluate(arg, env, trace) for arg in node.args]
        func = env.get_function(node.name)
        trace(f"call {node.name}({', '.join(to_string(a) for a in args)})", 3)
        return func.call(args)
    raise TypeError(f"unknown AST node {node!r}")


class Interpreter:
    """An evaluation session bound to a single environment."""
    def __init__(self, env: Optional[Environment] = None, debug_level: int = 0,
                 debug_file: Optional[str] = None):
        self.env = env if env is not None else Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_file and debug_level > 0 else None

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, *exc_info):
        self.close()

    # Public API
    def read(self, source: str) -> Node:
        node = parse(source)
        self.debug(f"READ: {debug_string(node)}")
        return node

    def run(self, node: Node) -> Any:
        try:
            value = evaluate(node, self.env, self.debug)
        except LangError as e:
            self.debug(f"failed: {e.kind.name} {list(e.arguments)}")
            raise
        self.debug(f"=> {to_string(value)} :{class_of(value).name}", 2)
        return value

    def execute(self, source: str) -> Any:
        """Parse one statement and evaluate it in this session."""
        return self.run(self.read(source))

    def implicit_declaration(self, source: str) -> str:
        """Prefix an assignment to an undeclared name with `var`."""
        target = assignment_target(source)
        if target is not None and not self.env.is_defined(target):
            return 'var ' + source
        return source


def program_lines(source: str) -> Iterator[Tuple[int, str]]:
    """Yield `(lineno, line)` for each statement line of a program.

    Blank lines and lines starting with `#` are skipped.
    """
    for lineno, line in enumerate(source.splitlines(), start=1):
        if not line.strip() or line.lstrip().startswith('#'):
            continue
        yield lineno, line


def run_program(source: str, debug_level: int = 0) -> Any:
    """Evaluate each statement line of `source`; return the last value."""
    result: Any = NULL
    with Interpreter(debug_level=debug_level) as interpreter:
        for _, line in program_lines(source):
            result = interpreter.execute(line)
    return result
