"""Error policy: every failure is fatal unless an operation opts into warnings."""

import enum
import sys


class ErrorPolicy(enum.Enum):
    """How an operation reacts to its own failure."""

    FATAL = "fatal"
    WARN = "warn"


def fail(message):
    """Print an error and abort the whole invocation with exit code 1."""
    print(f"Error: {message}", file=sys.stderr)
    raise SystemExit(1)


def warn(message):
    print(f"Warning: {message}", file=sys.stderr)


def report(policy, message):
    """Report a failed operation according to its policy.

    Returns normally only for ErrorPolicy.WARN.
    """
    if policy is ErrorPolicy.FATAL:
        fail(message)
    warn(message)
