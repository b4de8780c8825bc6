"""Toolchain configuration: compilers, platform and per-project folder prefixes."""

import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, TypeAlias, TypedDict

from .console import error
from .model import (
    DEFAULT_C_COMPILER,
    DEFAULT_CPP_COMPILER,
    PlatformVariant,
    ProjectToolchain,
    ToolchainConfig,
)
from .validation import (
    validate_choice,
    validate_non_empty_string,
    validate_object,
    validate_optional_string,
)


DEFAULT_CONFIG_FILE_NAME = "pymkgen.json"
CONFIG_FILE_ENV = "PYMKGEN_CONFIG_FILE"
PLATFORM_ENV = "PYMKGEN_PLATFORM"
PLATFORM_CHOICES = {variant.value: variant for variant in PlatformVariant}


class ProjectToolchainOverrides(TypedDict, total=False):
    c_compiler: str
    cpp_compiler: str
    cpp_folder_prefix: str
    csharp_folder_prefix: str


class ToolchainSettings(TypedDict):
    c_compiler: str
    cpp_compiler: str
    platform: PlatformVariant
    projects: dict[str, ProjectToolchainOverrides]
    config_path: Optional[Path]


ProjectValidationResult: TypeAlias = tuple[int, ProjectToolchainOverrides]


class ToolchainConfigManager:
    def __init__(
        self,
        c_compiler: str = DEFAULT_C_COMPILER,
        cpp_compiler: str = DEFAULT_CPP_COMPILER,
        platform: PlatformVariant = PlatformVariant.NATIVE,
        projects: Optional[dict[str, ProjectToolchainOverrides]] = None,
        config_path: Optional[Path] = None,
    ):
        self._c_compiler = c_compiler
        self._cpp_compiler = cpp_compiler
        self._platform = platform
        self._projects = projects if projects is not None else {}
        self._config_path = config_path

    @property
    def c_compiler(self) -> str:
        return self._c_compiler

    @property
    def cpp_compiler(self) -> str:
        return self._cpp_compiler

    @property
    def platform(self) -> PlatformVariant:
        return self._platform

    @property
    def projects(self) -> dict[str, ProjectToolchainOverrides]:
        return self._projects

    @property
    def config_path(self) -> Optional[Path]:
        return self._config_path

    def set_c_compiler(self, value: str) -> None:
        self._c_compiler = value

    def set_cpp_compiler(self, value: str) -> None:
        self._cpp_compiler = value

    def set_platform(self, value: PlatformVariant) -> None:
        self._platform = value

    def set_project(self, name: str, value: ProjectToolchainOverrides) -> None:
        current = self._projects.get(name, {})
        current.update(value)
        self._projects[name] = current

    def set_config_path(self, value: Optional[Path]) -> None:
        self._config_path = value

    def to_dict(self) -> ToolchainSettings:
        return {
            "c_compiler": self._c_compiler,
            "cpp_compiler": self._cpp_compiler,
            "platform": self._platform,
            "projects": {name: dict(entry) for name, entry in self._projects.items()},
            "config_path": self._config_path,
        }

    @classmethod
    def from_dict(cls, settings: ToolchainSettings) -> "ToolchainConfigManager":
        return cls(
            c_compiler=settings["c_compiler"],
            cpp_compiler=settings["cpp_compiler"],
            platform=settings["platform"],
            projects={name: dict(entry) for name, entry in settings["projects"].items()},
            config_path=settings["config_path"],
        )

    def to_toolchain(self) -> ToolchainConfig:
        """Freeze the current settings into the value the engine consumes.

        Projects without their own compilers inherit the global ones.
        """
        projects = {
            name: ProjectToolchain(
                c_compiler=entry.get("c_compiler", self._c_compiler),
                cpp_compiler=entry.get("cpp_compiler", self._cpp_compiler),
                cpp_folder_prefix=entry.get("cpp_folder_prefix", ""),
                csharp_folder_prefix=entry.get("csharp_folder_prefix", ""),
            )
            for name, entry in self._projects.items()
        }
        return ToolchainConfig(
            c_compiler=self._c_compiler,
            cpp_compiler=self._cpp_compiler,
            platform=self._platform,
            projects=projects,
        )


def _validate_project_entry(name: str, entry: Any) -> ProjectValidationResult:
    result, project = validate_object(entry, f"config projects.{name}")
    if result or project is None:
        return (1, {})
    normalized: ProjectToolchainOverrides = {}
    for key in ("c_compiler", "cpp_compiler"):
        result, validated = validate_non_empty_string(
            project.get(key), f"config projects.{name}.{key}"
        )
        if result:
            return (1, {})
        if validated is not None:
            normalized[key] = validated
    for key in ("cpp_folder_prefix", "csharp_folder_prefix"):
        result, validated = validate_optional_string(
            project.get(key), f"config projects.{name}.{key}"
        )
        if result:
            return (1, {})
        if validated is not None:
            normalized[key] = validated.strip()
    return (0, normalized)


def _apply_toolchain_data(data: dict, manager: ToolchainConfigManager) -> int:
    result, validated = validate_non_empty_string(data.get("c_compiler"), "config c_compiler")
    if result:
        return 1
    if validated is not None:
        manager.set_c_compiler(validated)

    result, validated = validate_non_empty_string(
        data.get("cpp_compiler"), "config cpp_compiler"
    )
    if result:
        return 1
    if validated is not None:
        manager.set_cpp_compiler(validated)

    result, platform = validate_choice(data.get("platform"), "config platform", PLATFORM_CHOICES)
    if result:
        return 1
    if platform is not None:
        manager.set_platform(platform)

    result, projects = validate_object(data.get("projects"), "config projects")
    if result:
        return 1
    for name, entry in (projects or {}).items():
        result, normalized = _validate_project_entry(name, entry)
        if result:
            return 1
        manager.set_project(name, normalized)
    return 0


def apply_config_file(path: Path, manager: ToolchainConfigManager) -> int:
    """Load and validate a JSON toolchain config file into ``manager``."""
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as exc:
        error(f"failed to read config file {path}: {exc}")
        return 1
    try:
        data = json.loads(contents)
    except json.JSONDecodeError as exc:
        error(f"invalid JSON in {path}: {exc}")
        return 1
    if not isinstance(data, dict):
        error(f"config file {path} must contain a JSON object")
        return 1
    manager.set_config_path(path)
    return _apply_toolchain_data(data, manager)


def apply_env_overrides(
    manager: ToolchainConfigManager, environ: Optional[Mapping[str, str]] = None
) -> int:
    env = os.environ if environ is None else environ
    c_override = env.get("CC")
    if c_override:
        manager.set_c_compiler(c_override)
    cpp_override = env.get("CXX")
    if cpp_override:
        manager.set_cpp_compiler(cpp_override)
    platform_override = env.get(PLATFORM_ENV)
    if platform_override:
        result, platform = validate_choice(platform_override, PLATFORM_ENV, PLATFORM_CHOICES)
        if result or platform is None:
            return 1
        manager.set_platform(platform)
    return 0


def discover_config_path(start_dir: Path, names: Sequence[str]) -> Optional[Path]:
    current = Path(start_dir).resolve()
    while True:
        for name in names:
            candidate = current / name
            if candidate.exists():
                return candidate
        if current.parent == current:
            break
        current = current.parent
    return None


def locate_config_file(
    explicit: Optional[str], environ: Optional[Mapping[str, str]] = None
) -> Optional[Path]:
    """Pick the config file: --config, then the environment, then discovery."""
    env = os.environ if environ is None else environ
    if explicit:
        return Path(explicit).expanduser()
    from_env = env.get(CONFIG_FILE_ENV)
    if from_env:
        return Path(from_env).expanduser()
    return discover_config_path(Path.cwd(), [DEFAULT_CONFIG_FILE_NAME])
