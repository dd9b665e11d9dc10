# main.py
"""Session handling, the interactive REPL and the command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory

from .config import Settings, load_settings
from .context import Context, update_context
from .errors import ConfigError, ParseError
from .evaluator import BUILTIN_NAMES
from .nodes import render
from .parser import CONSTANTS, parse
from .reducer import reduce

logger = logging.getLogger(__name__)

BANNER = "Recalc v0.1"

HELP_TEXT = (
    "Recalc help:\n"
    "Enter an expression to simplify it against the current variables.\n"
    "Examples:\n"
    "  x = y + 1        bind x (y may be defined later)\n"
    "  y = 2\n"
    "  x * 3            -> 9\n"
    "  2 ^ 3 ^ 2        -> 512 (^ is right-assoc)\n"
    "  sin(pi / 2)      -> 1\n"
    "  precision = 2    print numbers with 2 decimals\n"
    "Operators (high -> low): ^, then * /, then + -\n"
    "Constants: " + ", ".join(sorted(CONSTANTS)) + "\n"
    "Functions: " + ", ".join(BUILTIN_NAMES) + "\n"
    "Commands:\n"
    "  :help                  show help\n"
    "  :vars                  list variables\n"
    "  :exit                  exit\n"
)

# --------------------------
# Session
# --------------------------

class Session:
    """One calculator session: owns the Context and turns input lines into output text."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.context = Context(precision=self.settings.precision)

    def _process_command(self, line: str) -> Optional[str]:
        """Handle ':' commands. Returns the response, or None when the line is not a command."""
        s = line.strip()
        if not s.startswith(':'):
            return None
        parts = s[1:].split(None, 1)
        if not parts:
            return "No command specified. Use :help for available commands."
        cmd = parts[0].lower()
        if cmd in {'exit', 'quit'}:
            raise EOFError()
        if cmd == 'help':
            return HELP_TEXT.rstrip()
        if cmd == 'vars':
            return self._describe_variables()
        return f"Unknown command: {parts[0]}"

    def _describe_variables(self) -> str:
        lines = [f"{name} = {render(value)}" for name, value in sorted(self.context.variables.items())]
        if self.context.precision is not None:
            lines.append(f"precision = {self.context.precision}")
        if not lines:
            return "(no variables)"
        return "\n".join(lines)

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate a single line (either command or expression). Returns (ok, output)."""
        cmd_out = self._process_command(line)
        if cmd_out is not None:
            return True, cmd_out

        try:
            node = parse(line)
            diagnostic = update_context(node, self.context)
            result = render(reduce(node, self.context), self.context.precision)
        except ParseError as e:
            return False, f"Error: {e}"
        except Exception as e:
            logger.error(f"Unhandled error while evaluating line: {e!r}")
            return False, f"Unhandled error: {e!r}"
        if diagnostic is not None:
            return True, f"{diagnostic}\n{result}"
        return True, result

# --------------------------
# REPL
# --------------------------

class REPL:
    """Read-Eval-Print Loop around a Session."""

    def __init__(self, session: Session, settings: Optional[Settings] = None):
        self.session = session
        self.settings = settings or session.settings

    def _completer(self) -> WordCompleter:
        words = list(BUILTIN_NAMES) + sorted(CONSTANTS) + sorted(self.session.context.variables)
        return WordCompleter(words)

    def _interactive_lines(self) -> Iterable[str]:
        prompt = PromptSession(history=FileHistory(self.settings.history_file))
        while True:
            try:
                yield prompt.prompt(self.settings.prompt, completer=self._completer())
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                return

    def _piped_lines(self) -> Iterable[str]:
        for line in sys.stdin:
            yield line.rstrip("\n")

    def repl_loop(self) -> None:
        print(BANNER)
        lines = self._interactive_lines() if sys.stdin.isatty() else self._piped_lines()
        for line in lines:
            if not line.strip():
                continue
            try:
                _, out = self.session.evaluate_line(line)
            except EOFError:
                break
            print(out)

# --------------------------
# Entry point
# --------------------------

def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="recalc", description="Interactive symbolic calculator.")
    parser.add_argument(
        "--precision",
        type=int,
        help="Initial display precision (default: shortest form).",
    )
    parser.add_argument(
        "--history-file",
        type=str,
        help="File used for the interactive line history (default: ~/.recalc_history).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: WARNING).",
    )
    parser.add_argument(
        "-e", "--expr",
        action="append",
        default=[],
        help="Evaluate this line and exit; may be repeated, lines share one session.",
    )
    return parser


def run_lines(session: Session, lines: List[str]) -> int:
    """Evaluate lines in order, printing each result. Returns 1 if any line failed."""
    status = 0
    for line in lines:
        try:
            ok, out = session.evaluate_line(line)
        except EOFError:
            break
        print(out)
        if not ok:
            status = 1
    return status


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    try:
        settings = load_settings(
            precision=args.precision,
            history_file=args.history_file,
            log_level=args.log_level,
        )
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level_number,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.debug(f"Loaded settings: {settings}")

    session = Session(settings)
    if args.expr:
        return run_lines(session, args.expr)
    REPL(session, settings).repl_loop()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
