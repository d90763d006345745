import io
import os
from collections.abc import Callable
from typing import Any

import pytest

from lox.lox_errors import ErrorCollector, LoxRuntimeError
from lox.lox_interpreter import Interpreter
from lox.lox_lexer import scan
from lox.lox_parser import Parser

# Monkeypatch coverage to bypass teardown crash in act/docker
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


RunResult = tuple[str, LoxRuntimeError | None]


@pytest.fixture  # type: ignore[misc]
def run() -> Callable[..., RunResult]:
    """Runs Lox source on a fresh interpreter; returns (output, runtime error)."""

    def _run(source: str, repl: bool = False) -> RunResult:
        collector = ErrorCollector()
        parser = Parser(scan(source, collector), collector)
        statements = parser.parse_interactive() if repl else parser.parse()
        assert not collector.errors, [str(e) for e in collector.errors]
        out = io.StringIO()
        error = Interpreter(collector, stdout=out).interpret(statements, repl=repl)
        return out.getvalue(), error

    return _run
