import logging

from lox.lox_cli import ConsoleReporter, configure_logging, run_source
from lox.lox_interpreter import Interpreter
from lox.lox_lexer import scan

logger = logging.getLogger(__name__)


def open_braces(source: str) -> int:
    """Counts `{` tokens not yet closed; braces in strings and comments don't count."""
    types = [tok.type for tok in scan(source)]
    return types.count("LEFT_BRACE") - types.count("RIGHT_BRACE")


def read_entry() -> str | None:
    """Reads one REPL entry, continuing while `{` braces are left open.

    Returns None when the user asks to leave.
    """
    src_lines: list[str] = []
    while True:
        prompt = ">>> " if not src_lines else "... "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        if open_braces("\n".join(src_lines)) <= 0:
            break
    return "\n".join(src_lines).strip()


def start_repl(verbose: bool = False) -> None:
    print("Lox REPL. Type 'exit' or 'quit' to leave.")
    interpreter = Interpreter()
    reporter = ConsoleReporter()
    interpreter.reporter = reporter

    while True:
        try:
            src = read_entry()
            if src is None:
                print("Exiting Lox REPL.")
                return
            if not src:
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                configure_logging(verbose)
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            logger.debug("evaluating entry: %r", src)
            reporter.reset()
            run_source(src, interpreter, reporter, repl=True)

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Lox REPL.")
            break


def main() -> None:
    configure_logging(False)
    start_repl()


if __name__ == "__main__":
    main()
