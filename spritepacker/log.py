"""Plain console logging: progress goes to stdout, errors to stderr."""

import sys

_verbose = False


def set_verbose(enabled: bool) -> None:
    """Turn debug lines on or off for the whole process."""
    global _verbose
    _verbose = bool(enabled)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line, only printed in verbose mode."""
    if _verbose:
        print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)
