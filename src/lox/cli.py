"""Command-line driver for Lox: run a script file or an interactive prompt."""

from __future__ import annotations

import argparse
import codecs
import locale
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NoReturn, TextIO

from lox.errors import (
    EX_DATAERR,
    EX_NOINPUT,
    EX_OK,
    EX_USAGE,
    ConsoleReporter,
    ErrorReporter,
    UsageError,
)
from lox.lexer import tokenize

USAGE = "Usage: lox [script]"
DEFAULT_PROMPT = "> "
CONFIG_NAME = "lox.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    script: Path | None
    encoding: str
    prompt: str


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = _ArgumentParser(
        prog="lox",
        description="Lox interpreter front end",
    )
    # Positional count is checked in resolve_options so that misuse maps to 64
    p.add_argument("script", nargs="*", help="Script file (omit for interactive mode)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--encoding",
        metavar="NAME",
        help="Text encoding of the script (default: platform encoding)",
    )
    return p


def load_config(config_path: Path | None, base_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else base_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError, OSError) as exc:
        raise UsageError(f"invalid config file {path}: {exc}") from exc


def _table(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name, {})
    if not isinstance(value, dict):
        raise UsageError(f"config: [{name}] must be a table")
    return value


def _check_encoding(name: str) -> str:
    try:
        codecs.lookup(name)
    except LookupError as exc:
        raise UsageError(f"unknown encoding: {name}") from exc
    return name


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge defaults, config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    if len(args.script) > 1:
        raise UsageError()

    script = Path(args.script[0]) if args.script else None
    base_dir = Path(".")
    if script is not None and script.parent.parts:
        base_dir = script.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, base_dir)

    # Encoding: platform default < config < CLI
    encoding = locale.getpreferredencoding(False)
    cfg_source = _table(config, "source")
    if "encoding" in cfg_source:
        cfg_encoding = cfg_source["encoding"]
        if not isinstance(cfg_encoding, str):
            raise UsageError("config: source.encoding must be a string")
        encoding = _check_encoding(cfg_encoding)
    if args.encoding:
        encoding = _check_encoding(args.encoding)

    # Prompt: default < config
    prompt = DEFAULT_PROMPT
    cfg_repl = _table(config, "repl")
    if "prompt" in cfg_repl:
        cfg_prompt = cfg_repl["prompt"]
        if not isinstance(cfg_prompt, str):
            raise UsageError("config: repl.prompt must be a string")
        prompt = cfg_prompt

    return CliOptions(script=script, encoding=encoding, prompt=prompt)


def run(source: str, reporter: ErrorReporter, out: TextIO | None = None) -> bool:
    """Lex source and print every token, one per line, in source order.

    Both the file runner and the prompt go through here. Returns True if
    this call reported at least one error.
    """
    stream = out if out is not None else sys.stdout
    before = reporter.error_count
    tokens = tokenize(source, reporter)

    for token in tokens:
        print(token, file=stream)

    return reporter.error_count > before


def run_file(
    path: Path,
    reporter: ErrorReporter,
    encoding: str | None = None,
    out: TextIO | None = None,
) -> int:
    """Run a whole script once and turn the reporter state into an exit code."""
    if encoding is None:
        encoding = locale.getpreferredencoding(False)

    try:
        data = path.read_bytes()
    except OSError as exc:
        print(f"error: cannot read {path}: {exc.strerror or exc}", file=sys.stderr)
        return EX_NOINPUT

    try:
        source = data.decode(encoding)
    except UnicodeDecodeError as exc:
        print(f"error: cannot decode {path} as {encoding}: {exc.reason}", file=sys.stderr)
        return EX_DATAERR

    run(source, reporter, out)

    if reporter.had_error:
        return EX_DATAERR
    return EX_OK


def run_prompt(
    reporter: ErrorReporter,
    prompt: str = DEFAULT_PROMPT,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
) -> int:
    """Read-line-execute loop. Errors never end the session; EOF does."""
    reader = stdin if stdin is not None else sys.stdin
    stream = out if out is not None else sys.stdout

    try:
        while True:
            stream.write(prompt)
            stream.flush()
            line = reader.readline()
            if not line:
                break
            run(line.rstrip("\n").rstrip("\r"), reporter, stream)
            # A mistake on one line must not poison the next one
            reporter.reset()
    except KeyboardInterrupt:
        pass

    return EX_OK


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/64/65/66). Does not call sys.exit()."""
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
        options = resolve_options(args)
    except UsageError as exc:
        if str(exc):
            print(f"error: {exc}", file=sys.stderr)
        print(USAGE)
        return EX_USAGE

    reporter = ConsoleReporter()

    if options.script is not None:
        return run_file(options.script, reporter, options.encoding)
    return run_prompt(reporter, options.prompt)


def entry() -> NoReturn:
    sys.exit(main())
