"""Interactive read-eval-print loop for groLang."""

from __future__ import annotations

import builtins
from typing import Callable, Optional

from . import LANG_NAME, LANG_VERSION
from .errors import LangError
from .interpreter import Interpreter
from .types import to_string

PROMPT = '> '

HELP = """Statements:
  val x: Int          declare an immutable variable
  var x: Int          declare a mutable variable
  val x = 3           declare and assign, the type is inferred
  x = 4               assign (an unknown name is declared with var)
  print(x)            call a built-in function
Built-in functions: print(Any), read(), type(Any), str(Any)
Commands:
  :h                  show this help
  :q                  quit"""


class Repl:
    """Reads statements one line at a time and evaluates them in one session."""
    def __init__(self, interpreter: Optional[Interpreter] = None, debug: bool = False,
                 input_fn: Optional[Callable[[str], str]] = None,
                 output_fn: Optional[Callable[[str], None]] = None):
        self.interpreter = interpreter or Interpreter()
        self.debug = debug
        self.input = input_fn or builtins.input
        self.output = output_fn or builtins.print

    def loop(self):
        self.output(f"Welcome to {LANG_NAME} {LANG_VERSION} REPL")
        self.output("type :h for help, :q to quit")
        while True:
            try:
                line = self.input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                break
            if line.startswith(':'):
                if line.strip() == ':q':
                    break
                if line.strip() == ':h':
                    self.output(HELP)
                continue
            if not line.strip():
                continue
            self.eval_line(line)
        self.output(f"{LANG_NAME} terminated")

    def eval_line(self, line: str):
        """Evaluate one input line and print its result or its failure."""
        source = self.interpreter.implicit_declaration(line)
        try:
            node = self.interpreter.read(source)
        except LangError as e:
            self.output(f"READ ERROR: {e}")
            return
        if self.debug:
            self.output(f"READ: {node.debug_string()}")
        try:
            result = self.interpreter.run(node)
        except LangError as e:
            self.output(f"EVAL ERROR: {e}")
            return
        self.output(to_string(result))
