#!/usr/bin/env python3
"""Command-line front end: generate makefiles from JSON project descriptions."""

import importlib.metadata
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import (
    DEFAULT_CONFIG_FILE_NAME,
    PLATFORM_CHOICES,
    ToolchainConfigManager,
    apply_config_file,
    apply_env_overrides,
    locate_config_file,
)
from .console import error, info
from .errors import SynthesisError
from .model import ToolchainConfig
from .project_loader import load_project_file
from .synthesis import synthesize, write_project_makefile
from .validation import validate_choice


DEFAULT_VERSION = "0.1.0"
GENERATE_USAGE = (
    "usage: pymkgen generate <project.json>... [--config <path>] "
    "[--platform <native|cygwin>] [--stdout]"
)


def usage() -> None:
    print("usage: pymkgen <command> [args...]")
    print("")
    print("commands:")
    print("  generate (g) <project.json>...  write <root>/<name>.makefile for each project")
    print("  help (h)                        show this help text")
    print("")
    print("options:")
    print("  --config <path>     load toolchain settings from a JSON file")
    print("  --platform <name>   native (default) or cygwin")
    print("  --stdout            print the makefile instead of writing it")
    print("  -v, --version       print the version")
    print("")
    print("examples:")
    print("  pymkgen generate hello.json")
    print("  pymkgen g hello.json utils.json --platform cygwin")
    print(f"  pymkgen generate hello.json --config {DEFAULT_CONFIG_FILE_NAME}")


def _version() -> str:
    try:
        return importlib.metadata.version("pymkgen")
    except importlib.metadata.PackageNotFoundError:
        return DEFAULT_VERSION


def load_toolchain(
    config_path: Optional[str], platform: Optional[str]
) -> Optional[ToolchainConfig]:
    """Resolve the toolchain from the config file, environment and flags."""
    manager = ToolchainConfigManager()
    candidate = locate_config_file(config_path)
    if candidate is not None:
        if not candidate.exists():
            error(f"config file {candidate} not found")
            return None
        if apply_config_file(candidate, manager) != 0:
            return None
    if apply_env_overrides(manager) != 0:
        return None
    if platform:
        result, variant = validate_choice(platform, "--platform", PLATFORM_CHOICES)
        if result or variant is None:
            return None
        manager.set_platform(variant)
    return manager.to_toolchain()


def generate(
    project_files: Sequence[Path], toolchain: ToolchainConfig, to_stdout: bool = False
) -> int:
    """Synthesize each project in turn; stop at the first failure."""
    for project_file in project_files:
        loaded = load_project_file(project_file)
        if loaded is None:
            return 1
        project, resolver = loaded
        try:
            if to_stdout:
                sys.stdout.write(synthesize(project, toolchain, resolver))
                continue
            path = write_project_makefile(project, toolchain, resolver)
        except SynthesisError as exc:
            error(f"cannot generate a makefile for {project.name}: {exc}")
            return 1
        except OSError as exc:
            error(f"failed to write {project.makefile_path}: {exc}")
            return 1
        info(f"created {path}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv if argv is None else argv)
    if len(argv) < 2:
        usage()
        return 2

    command = argv[1]
    if command in {"-v", "--version"}:
        print(f"pymkgen {_version()}")
        return 0
    args = argv[2:]

    aliases = {
        "g": "generate",
        "gen": "generate",
        "h": "help",
    }
    command = aliases.get(command, command)
    if command in {"help", "-h", "--help"}:
        usage()
        return 0
    if command != "generate":
        error(f"unknown command '{command}'")
        usage()
        return 2

    config_path = None
    platform = None
    to_stdout = False
    project_files: list[Path] = []
    index = 0
    while index < len(args):
        arg = args[index]
        if arg == "--config":
            if index + 1 >= len(args):
                error("usage: --config <path>")
                return 2
            config_path = args[index + 1]
            index += 2
            continue
        if arg.startswith("--config="):
            config_path = arg.split("=", 1)[1]
            if not config_path:
                error("usage: --config <path>")
                return 2
            index += 1
            continue
        if arg == "--platform":
            if index + 1 >= len(args):
                error("usage: --platform <native|cygwin>")
                return 2
            platform = args[index + 1]
            index += 2
            continue
        if arg.startswith("--platform="):
            platform = arg.split("=", 1)[1]
            if not platform:
                error("usage: --platform <native|cygwin>")
                return 2
            index += 1
            continue
        if arg == "--stdout":
            to_stdout = True
            index += 1
            continue
        if arg.startswith("-"):
            error(f"unknown option '{arg}'")
            error(GENERATE_USAGE)
            return 2
        project_files.append(Path(arg).expanduser())
        index += 1

    if not project_files:
        error(GENERATE_USAGE)
        return 2

    toolchain = load_toolchain(config_path, platform)
    if toolchain is None:
        return 1
    return generate(project_files, toolchain, to_stdout)


if __name__ == "__main__":
    raise SystemExit(main())
