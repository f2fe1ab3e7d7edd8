"""Abstract Syntax Tree (AST) definitions for groLang.

The parser builds one node per statement. Nodes are immutable and hold only
what is needed to evaluate them; the environment is always passed in. The
closed set of node kinds is Literal, Identifier, Declaration, Assignment,
Block and Call. Evaluation lives in `grolang.interpreter`; the debug form of
a node, which mirrors a prefix-call syntax, is built here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .errors import ErrorKind, LangError
from .types import ANY, NULL, class_of, from_python, to_string


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""

    def eval(self, env):
        from .interpreter import evaluate
        return evaluate(self, env)

    def debug_string(self) -> str:
        return debug_string(self)


@dataclass(frozen=True)
class Literal(Node):
    value: Any
    literal_type: str  # 'Int', 'Float', 'Bool', 'Str', 'Symbol', or 'Any' for null


@dataclass(frozen=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True)
class Declaration(Node):
    name: str
    type_name: str
    is_mutable: bool = False


@dataclass(frozen=True)
class Assignment(Node):
    name: str
    value: Node


@dataclass(frozen=True)
class Block(Node):
    statements: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class Call(Node):
    name: str
    args: Tuple[Node, ...] = ()


def literal(value: Any) -> Literal:
    """Build a Literal from a native Python value or a groLang value."""
    if isinstance(value, (type(None), bool, int, float, str)):
        value = from_python(value)
    return Literal(value, class_of(value).name)


def debug_string(node: Node) -> str:
    """Render a node in its debug form, e.g. `assign('x, 3)`."""
    if isinstance(node, Literal):
        return to_string(NULL if node.value is None else node.value)
    if isinstance(node, Identifier):
        return f"'{node.name}"
    if isinstance(node, Declaration):
        return f"declare('{node.name},'{node.type_name},{'true' if node.is_mutable else 'false'})"
    if isinstance(node, Assignment):
        return f"assign('{node.name}, {debug_string(node.value)})"
    if isinstance(node, Block):
        return '{' + '; '.join(debug_string(s) for s in node.statements) + '}'
    if isinstance(node, Call):
        return f"{node.name}(" + ','.join(debug_string(a) for a in node.args) + ')'
    raise TypeError(f"unknown AST node {node!r}")


def static_type(node: Node) -> Optional[str]:
    """Return the class name a node is known to produce without evaluating it.

    Only literals (and assignments or blocks ending in one) have a class
    that can be determined before evaluation. `None` means unknown.
    """
    if isinstance(node, Literal):
        return node.literal_type
    if isinstance(node, Assignment):
        return static_type(node.value)
    if isinstance(node, Block):
        return static_type(node.statements[-1]) if node.statements else ANY.name
    if isinstance(node, Declaration):
        return 'Symbol'
    return None


def declaration_assignment(name: str, type_name: Optional[str], is_mutable: bool, value: Node) -> Block:
    """Desugar `val name[: Type] = value` into a declaration then an assignment.

    The declared type is the explicit annotation or, when missing, the class
    inferred from `value`. Both must agree when both are present.
    """
    inferred = static_type(value)
    if type_name is None:
        if inferred is None or inferred == ANY.name:
            raise LangError(ErrorKind.TYPE_NOT_INFERRED, name)
        type_name = inferred
    elif inferred is not None and inferred != type_name:
        raise LangError(ErrorKind.TYPE_ERROR, type_name, inferred)
    return Block((Declaration(name, type_name, is_mutable), Assignment(name, value)))
