"""
Lox CLI Entrypoint.

This module provides the command-line interface for running Lox source code.
It supports executing files or inline strings, dumping tokens or the AST, and
the interactive REPL.

Example usage:
    lox hello.lox
    lox -s "print 1 + 2;"
    lox hello.lox --tokens
    lox -s "var a = 1;" --ast
    lox --repl --verbose

Exit codes:
    0   success
    64  usage error (e.g. not a .lox file)
    65  lexical or syntax error
    66  input file could not be read
    70  runtime error, or an AST too deep to dump as JSON

Functions:
    run_source(source, interpreter, reporter, repl=False) -> None:
        Runs one batch through the pipeline (scan → parse → interpret).
    run_lox(source, is_string=False, show_tokens=False, show_ast=False) -> int:
        Runs a whole program and returns the process exit code.
    main() -> None:
        Parses CLI arguments and dispatches to the REPL or `run_lox`.
"""

import argparse
import json
import logging
import sys

from lox.lox_errors import LoxRuntimeError, LoxStaticError
from lox.lox_interpreter import Interpreter
from lox.lox_lexer import CharacterStream, Lexer
from lox.lox_parser import Parser

EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


class ConsoleReporter:
    """Prints diagnostics to stderr and remembers whether any were seen.

    The flags belong to the driver: the REPL clears them before every line,
    and `run_lox` turns them into an exit code.
    """

    def __init__(self) -> None:
        self.had_error = False
        self.had_runtime_error = False

    def report_error(self, error: LoxStaticError) -> None:
        print(str(error), file=sys.stderr)
        self.had_error = True

    def report_runtime_error(self, error: LoxRuntimeError) -> None:
        print(str(error), file=sys.stderr)
        self.had_runtime_error = True

    def reset(self) -> None:
        self.had_error = False
        self.had_runtime_error = False


def configure_logging(verbose: bool) -> None:
    """Sends `lox.*` log records to stderr, at DEBUG when `verbose` is set."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("lox").setLevel(logging.DEBUG if verbose else logging.WARNING)


def run_source(
    source: str,
    interpreter: Interpreter,
    reporter: ConsoleReporter,
    repl: bool = False,
) -> None:
    """
    Scan, parse and run one batch of Lox source.

    Nothing is executed when scanning or parsing reported an error.

    Args:
        source (str): Program text or a single REPL entry.
        interpreter (Interpreter): Holds the global scope; reused across batches.
        reporter (ConsoleReporter): Receives every diagnostic.
        repl (bool): Parse as a REPL line and echo a lone expression's value.
    """
    tokens = Lexer(CharacterStream(source), reporter).scan_tokens()
    parser = Parser(tokens, reporter)
    statements = parser.parse_interactive() if repl else parser.parse()

    if reporter.had_error:
        return

    interpreter.interpret(statements, repl=repl)


def run_lox(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    show_ast: bool = False,
) -> int:
    """
    Run a Lox program, or dump its tokens or AST, and return an exit code.

    Args:
        source (str): The Lox source code or path to a `.lox` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        show_tokens (bool): Print the token stream instead of running the program.
        show_ast (bool): Print the parsed statements as JSON instead of running them.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.lox'.
        OSError: If the source file cannot be read.
    """
    if not is_string and not source.endswith(".lox"):
        raise ValueError("Only .lox files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    reporter = ConsoleReporter()

    if show_tokens or show_ast:
        tokens = Lexer(CharacterStream(source), reporter).scan_tokens()
        if show_tokens:
            for tok in tokens:
                literal = "" if tok.literal is None else f" {tok.literal!r}"
                print(f"{tok.line}:{tok.col} {tok.type} {tok.lexeme!r}{literal}")
        else:
            statements = Parser(tokens, reporter).parse()
            try:
                dump = json.dumps([stmt.to_dict() for stmt in statements], indent=2)
            except RecursionError:
                print("lox: syntax tree is too deep to print as JSON", file=sys.stderr)
                return EX_SOFTWARE
            print(dump)
        return EX_DATAERR if reporter.had_error else EX_OK

    run_source(source, Interpreter(reporter), reporter)
    if reporter.had_error:
        return EX_DATAERR
    return EX_SOFTWARE if reporter.had_runtime_error else EX_OK


def main() -> None:
    """
    Entry point for the Lox CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise runs the program and exits with `run_lox`'s exit code.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Print the token stream and stop.
        - `--ast`: Print the parsed AST as JSON and stop.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Log pipeline details at DEBUG level.
    """
    parser = argparse.ArgumentParser(prog="lox")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream and stop"
    )
    parser.add_argument(
        "--ast", action="store_true", help="Print the parsed AST as JSON and stop"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log pipeline details to stderr"
    )

    args = parser.parse_args()
    configure_logging(args.verbose)

    if args.repl or args.source is None:
        from lox.lox_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    try:
        code = run_lox(
            source=args.source,
            is_string=args.string,
            show_tokens=args.tokens,
            show_ast=args.ast,
        )
    except ValueError as e:
        print(f"lox: {e}", file=sys.stderr)
        code = EX_USAGE
    except OSError as e:
        print(f"lox: cannot read {args.source}: {e.strerror}", file=sys.stderr)
        code = EX_NOINPUT
    logger.debug("exiting with status %d", code)
    sys.exit(code)


if __name__ == "__main__":
    main()
