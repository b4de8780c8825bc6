"""Serialization of makefile statements and the final write to disk."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, TypeAlias


LINE_ENDING = "\n"


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class Assignment:
    name: str
    value: str
    spaced: bool = False


@dataclass(frozen=True)
class IncludeDirective:
    # Written as '-include' so a missing dependency file is not an error.
    path: str


@dataclass(frozen=True)
class Rule:
    target: str
    prerequisites: tuple[str, ...] = ()
    commands: tuple[str, ...] = ()
    phony: bool = False


Statement: TypeAlias = Comment | Blank | Assignment | IncludeDirective | Rule


def _render_statement(statement: Statement) -> list[str]:
    match statement:
        case Comment(text=text):
            return [f"# {text}"]
        case Blank():
            return [""]
        case Assignment(name=name, value=value, spaced=True):
            return [f"{name} = {value}"]
        case Assignment(name=name, value=value):
            return [f"{name}={value}"]
        case IncludeDirective(path=path):
            return [f"-include {path}"]
        case Rule(target=target, prerequisites=prerequisites, commands=commands, phony=phony):
            lines = []
            if phony:
                lines.append(f".PHONY: {target}")
            if prerequisites:
                lines.append(f"{target}: {' '.join(prerequisites)}")
            else:
                lines.append(f"{target}:")
            lines.extend(f"\t{command}" for command in commands)
            return lines
    raise TypeError(f"not a makefile statement: {statement!r}")


def render(statements: Iterable[Statement]) -> str:
    """Render statements to makefile text with LF line endings."""
    lines: list[str] = []
    for statement in statements:
        lines.extend(_render_statement(statement))
    return LINE_ENDING.join(lines) + LINE_ENDING


def _default_file_mode() -> int:
    # The mode open() would give a new file under the current umask.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_makefile(path: Path, statements: Sequence[Statement]) -> Path:
    """Write the rendered statements to ``path``.

    The text goes to a temporary file beside ``path`` which replaces it once
    fully written, so a failed run never leaves a truncated makefile behind.
    """
    text = render(statements)
    path = Path(path)
    handle, temp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(handle, "w", encoding="utf-8", newline=LINE_ENDING) as out:
            out.write(text)
        os.chmod(temp_name, _default_file_mode())
        os.replace(temp_name, path)
    except BaseException:
        try:
            os.unlink(temp_name)
        except FileNotFoundError:
            pass
        raise
    return path
