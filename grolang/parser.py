"""Parser for groLang statements.

One line of source is one statement. The text is fed to a Lark LALR
parser and the resulting parse tree is turned into a single AST node by
`ASTTransformer`. A declaration with an initializer (`val x: Int = 3`) is
desugared into a block holding a declaration and an assignment.

Lark errors are reported as `LangError`: an unrecognised character is an
`UNKNOWN_TOKEN`, anything else is a `SYNTAX_ERROR`.
"""

from __future__ import annotations

import ast as py_ast
import math
import re
from typing import List, Optional

from lark import Lark, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, VisitError

from .ast import Assignment, Call, Declaration, Identifier, Literal, Node, declaration_assignment
from .errors import ErrorKind, LangError
from .types import (
    INT64_MAX, INT64_MIN, NULL, TYPE_ANY, TYPE_BOOL, TYPE_FLOAT, TYPE_INT, TYPE_STR, TYPE_SYMBOL,
    BoolVal, FloatVal, IntVal, StrVal, SymbolVal,
)


GROLANG_GRAMMAR = r"""
    ?start: statement

    ?statement: declaration_assignment
              | declaration
              | assignment
              | expression

    declaration: prefix IDENT ":" IDENT
    declaration_assignment: prefix IDENT [":" IDENT] "=" expression
    assignment: IDENT "=" expression
    prefix: VAL | VAR

    ?expression: literal
               | call
               | IDENT -> identifier

    call: IDENT "(" [expression ("," expression)*] ")"

    literal: INTEGER_LITERAL
           | DECIMAL_LITERAL
           | STRING_LITERAL
           | TRUE
           | FALSE
           | NULL
           | SYMBOL_LITERAL

    VAL: "val"
    VAR: "var"
    TRUE: "true"
    FALSE: "false"
    NULL: "null"

    INTEGER_LITERAL: /-?[0-9][0-9_]*/
    DECIMAL_LITERAL.2: /-?([0-9][0-9_]*\.[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?/
                     | /-?[0-9][0-9_]*[eE][+-]?[0-9]+/
    STRING_LITERAL: /"(\\.|[^"\\])*"/
    SYMBOL_LITERAL: /'[A-Za-z_][A-Za-z0-9_]*/

    %import common.CNAME -> IDENT
    %import common.WS_INLINE
    %ignore WS_INLINE
"""


GROLANG_PARSER = Lark(
    GROLANG_GRAMMAR,
    parser='lalr',
    lexer='basic',
    propagate_positions=True,
    maybe_placeholders=False,
)

ASSIGNMENT = re.compile(r'^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=(?!=)')


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def prefix(self, items):
        return str(items[0]) == 'var'

    def declaration(self, items):
        is_mutable, name, type_name = items
        return Declaration(str(name), str(type_name), is_mutable)

    def declaration_assignment(self, items):
        is_mutable = items[0]
        name = str(items[1])
        if len(items) == 4:
            type_name: Optional[str] = str(items[2])
            value = items[3]
        else:
            type_name = None
            value = items[2]
        return declaration_assignment(name, type_name, is_mutable, value)

    def assignment(self, items):
        name, value = items
        return Assignment(str(name), value)

    def identifier(self, items):
        return Identifier(str(items[0]))

    def call(self, items):
        name = str(items[0])
        args: List[Node] = [item for item in items[1:] if item is not None]
        return Call(name, tuple(args))

    def literal(self, items):
        token = items[0]
        text = token.value
        if token.type == 'INTEGER_LITERAL':
            value = int(text.replace('_', ''))
            if not INT64_MIN <= value <= INT64_MAX:
                raise LangError(ErrorKind.SYNTAX_ERROR, f"integer {text} out of range")
            return Literal(IntVal(value), TYPE_INT)
        if token.type == 'DECIMAL_LITERAL':
            value = float(text.replace('_', ''))
            if not math.isfinite(value):
                raise LangError(ErrorKind.SYNTAX_ERROR, f"decimal {text} out of range")
            return Literal(FloatVal(value), TYPE_FLOAT)
        if token.type == 'STRING_LITERAL':
            # Use Python ast.literal_eval to unescape
            try:
                return Literal(StrVal(py_ast.literal_eval(text)), TYPE_STR)
            except (SyntaxError, ValueError):
                raise LangError(ErrorKind.SYNTAX_ERROR, f"invalid escape in {text}") from None
        if token.type == 'TRUE':
            return Literal(BoolVal(True), TYPE_BOOL)
        if token.type == 'FALSE':
            return Literal(BoolVal(False), TYPE_BOOL)
        if token.type == 'NULL':
            return Literal(NULL, TYPE_ANY)
        if token.type == 'SYMBOL_LITERAL':
            return Literal(SymbolVal(text[1:]), TYPE_SYMBOL)
        raise LangError(ErrorKind.UNKNOWN_TOKEN, text)


def parse(source: str) -> Node:
    """Parse one groLang statement into an AST node.

    Raises `LangError` for malformed input, and for a declaration whose
    initializer does not agree with (or cannot provide) its type.
    """
    if not source.strip():
        raise LangError(ErrorKind.SYNTAX_ERROR, 'empty statement')
    try:
        tree = GROLANG_PARSER.parse(source.strip())
        return ASTTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, LangError):
            raise e.orig_exc from None
        raise
    except UnexpectedCharacters as e:
        raise LangError(ErrorKind.UNKNOWN_TOKEN, f"{e.char!r} at position {e.column}") from None
    except UnexpectedEOF:
        raise LangError(ErrorKind.SYNTAX_ERROR, 'unexpected end of input') from None
    except UnexpectedInput as e:
        raise LangError(ErrorKind.SYNTAX_ERROR, f"at position {e.column}") from None


def assignment_target(source: str) -> Optional[str]:
    """Return the name assigned by a bare `name = expr` line, if it is one."""
    match = ASSIGNMENT.match(source)
    if match is None or match.group(1) in ('val', 'var'):
        return None
    return match.group(1)
