"""CLI entry point for the groLang interpreter.

Usage:
    python -m grolang [-v|-vv|-vvv] [-d] [--lang EN|FR]
    python -m grolang [-v...] <program_file>
    python -m grolang --version

Options:
  -v            Increase debug verbosity (can be repeated)
  -d, --debug   Echo the debug form of each statement before evaluating it
  --lang        Language of the error messages
  --debug-file  Write the debug trace to this file instead of stdout

Without a program file an interactive REPL is started. A program file is
evaluated one statement per line; evaluation stops at the first failure.
"""

import argparse
import sys
from pathlib import Path

from . import LANG_NAME, LANG_VERSION, messages
from .errors import LangError
from .interpreter import Interpreter, program_lines
from .repl import Repl


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="groLang interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('-d', '--debug', action='store_true', help='echo the debug form of each statement')
    parser.add_argument('--lang', default=messages.DEFAULT_LANG, choices=sorted(messages.CATALOGS),
                        help='language of the error messages')
    parser.add_argument('--debug-file', metavar='FILE', help='write the debug trace to FILE')
    parser.add_argument('--version', action='version', version=f'{LANG_NAME} {LANG_VERSION}')
    parser.add_argument('program', nargs='?', help='groLang program file to execute')
    args = parser.parse_args(argv)

    messages.set_language(args.lang)
    interpreter = Interpreter(debug_level=args.v, debug_file=args.debug_file)

    if not args.program:
        with interpreter:
            Repl(interpreter, debug=args.debug).loop()
        return

    program_file = Path(args.program)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        source = f.read()
    with interpreter:
        for lineno, line in program_lines(source):
            try:
                node = interpreter.read(line)
                if args.debug:
                    print(f"READ: {node.debug_string()}")
                interpreter.run(node)
            except LangError as e:
                print(f"Error at line {lineno}: {e}", file=sys.stderr)
                sys.exit(1)


if __name__ == '__main__':
    main()
