"""Command-line utilities for objecthash."""

from __future__ import annotations

import argparse
import json
import logging
import logging.handlers
import sys
from pathlib import Path

from objecthash.api import EncodingOptions, digest
from objecthash.logging_pipeline import configure_structured_logging, shutdown_listeners
from objecthash.primitives import ALGORITHMS
from objecthash.settings import get_settings

LOGGER = logging.getLogger("objecthash.cli")


def _read_stdin() -> str | None:
    """Read a JSON document from stdin if one is piped in."""
    try:
        if sys.stdin and not sys.stdin.isatty():
            return sys.stdin.read()
    except OSError as e:
        print(f"Error reading stdin: {e}", file=sys.stderr)
    return None


def _reject_constant(name: str) -> object:
    raise ValueError(f"JSON constant {name} is not part of the objecthash value model")


def _load_document(path: str | None, stdin_payload: str | None) -> object:
    """Parse the JSON document from a file or stdin.

    ``NaN`` and ``Infinity`` are refused while parsing; floats, booleans and
    ``null`` parse normally and are refused by the encoder.
    """
    if path:
        text = Path(path).read_text(encoding="utf-8")
    elif stdin_payload:
        text = stdin_payload
    else:
        raise ValueError("No input provided. Use --input or pipe JSON via stdin.")
    return json.loads(text, parse_constant=_reject_constant)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="objecthash",
        description="Compute the objecthash digest of a JSON document.",
    )
    parser.add_argument(
        "--input",
        "-i",
        help="Path to a JSON file. If omitted, reads from stdin.",
    )
    parser.add_argument(
        "--algorithm",
        "-a",
        choices=sorted(ALGORITHMS),
        help="Digest algorithm. Defaults to OBJECTHASH_ALGORITHM or sha256.",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        help="Maximum nesting depth. Defaults to OBJECTHASH_MAX_DEPTH or 100.",
    )
    parser.add_argument(
        "--expect",
        "-e",
        metavar="HEX",
        help="Expected hex digest; exit status reports whether it matches.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print a JSON object instead of the bare hex digest.",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit structured JSON logs on stderr.",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Quiet mode: suppress output, just return exit code.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Hash a JSON document and print its digest."""
    parser = _build_parser()

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - controlled via tests
        exit_code = int(exc.code) if isinstance(exc.code, int) else 1
        return 0 if exit_code == 0 else 1

    package_logger = logging.getLogger("objecthash")
    existing_handlers = list(package_logger.handlers)
    previous_level = package_logger.level
    listeners: list[logging.handlers.QueueListener] = []

    try:
        settings = get_settings()
        if args.log_json:
            listeners.append(
                configure_structured_logging(
                    package_logger, level=settings.log_level_number
                )
            )

        options = EncodingOptions(
            algorithm=args.algorithm or settings.algorithm,
            max_depth=(
                args.max_depth if args.max_depth is not None else settings.max_depth
            ),
            octet_strings=False,
        )
        stdin_payload = None if args.input else _read_stdin()
        document = _load_document(args.input, stdin_payload)
        result = digest(document, options=options).hex()

        matches: bool | None = None
        if args.expect is not None:
            expected = args.expect.strip().lower()
            matches = result == expected
            LOGGER.info(
                "Compared digest with expectation",
                extra={"algorithm": options.algorithm, "matches": matches},
            )

        if not args.quiet:
            if args.as_json:
                report: dict[str, object] = {
                    "algorithm": options.algorithm,
                    "digest": result,
                }
                if matches is not None:
                    report["matches"] = matches
                print(json.dumps(report, separators=(",", ":")))
            else:
                print(result)

        return 0 if matches in (None, True) else 1

    except Exception as exc:
        LOGGER.info("Failed to compute digest", exc_info=exc)
        if not args.quiet:
            message = str(exc) or type(exc).__name__
            if isinstance(exc, RecursionError):
                message = f"Document is nested too deeply to parse: {message}"
            print(message, file=sys.stderr)
        return 1
    finally:
        shutdown_listeners(listeners)
        for handler in package_logger.handlers[:]:
            if handler not in existing_handlers:
                package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)


if __name__ == "__main__":
    raise SystemExit(main())
