import sys


def info(message: str) -> None:
    """Print a standard informational message."""
    print(f"[pymkgen] {message}")


def error(message: str) -> None:
    """Print a standardized error message to stderr."""
    print(f"error: {message}", file=sys.stderr)
