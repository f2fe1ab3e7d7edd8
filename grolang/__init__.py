# groLang language package
# This package provides the evaluation core, parser and REPL of groLang.
LANG_NAME = 'groLang'
LANG_VERSION = '0.1'

from .errors import ErrorKind, ErrorVal, LangError
from .environment import Environment, Symbol
from .parser import parse
from .interpreter import Interpreter, evaluate, run_program

__all__ = [
    'ErrorKind',
    'ErrorVal',
    'LangError',
    'Environment',
    'Symbol',
    'parse',
    'Interpreter',
    'evaluate',
    'run_program',
]
