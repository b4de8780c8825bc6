"""In-memory description of a native project and of the toolchain building it."""

import os
import posixpath
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Mapping, Optional, TypeAlias

from . import naming


DEFAULT_C_COMPILER = "gcc"
DEFAULT_CPP_COMPILER = "g++"
DEFAULT_COMMAND_TEMPLATE = "{executable} {input}"


class PlatformVariant(Enum):
    NATIVE = "native"
    CYGWIN = "cygwin"


class CharacterSet(Enum):
    NOT_SET = "not_set"
    UNICODE = "unicode"
    MULTI_BYTE = "multi_byte"


class ProjectLanguage(Enum):
    CPP = "cpp"
    CSHARP = "csharp"


@dataclass(frozen=True)
class Executable:
    pass


@dataclass(frozen=True)
class StaticLibrary:
    pass


@dataclass(frozen=True)
class SharedLibrary:
    # None until bound to the toolchain's platform by the synthesis entry point.
    platform: Optional[PlatformVariant] = None

    @property
    def extension(self) -> str:
        return ".dll" if self.platform is PlatformVariant.CYGWIN else ".so"

    @property
    def position_independent(self) -> bool:
        # The cygwin toolchain supplies this by default.
        return self.platform is not PlatformVariant.CYGWIN


OutputKind: TypeAlias = Executable | StaticLibrary | SharedLibrary


@dataclass(frozen=True)
class CustomBuildRule:
    rule_name: str
    file: str
    executable: str
    command_template: str = DEFAULT_COMMAND_TEMPLATE

    def command_line(self, folder_prefix: str = "") -> str:
        executable = naming.add_prefix_to_file_path(self.executable, folder_prefix)
        template = self.command_template or DEFAULT_COMMAND_TEMPLATE
        return template.replace("{executable}", executable).replace(
            "{input}", naming.normalize_path(self.file)
        )


@dataclass(frozen=True)
class Configuration:
    name: str
    intermediate_folder: str
    output_folder: str
    include_paths: tuple[str, ...] = ()
    library_paths: tuple[str, ...] = ()
    libraries: tuple[str, ...] = ()
    preprocessor_definitions: tuple[str, ...] = ()
    character_set: CharacterSet = CharacterSet.NOT_SET
    compiler_flags: tuple[str, ...] = ()
    pre_build_event: str = ""
    post_build_event: str = ""
    custom_build_rules: tuple[CustomBuildRule, ...] = ()
    implicitly_linked_objects: tuple[str, ...] = ()

    @property
    def identifier(self) -> str:
        """The configuration name as it appears in targets and variables."""
        return naming.sanitize_identifier(self.name)


@dataclass(frozen=True)
class Project:
    name: str
    root: Path
    output_kind: OutputKind
    source_files: tuple[str, ...] = ()
    configurations: tuple[Configuration, ...] = ()

    def __post_init__(self) -> None:
        # Ordered and deduplicated, first occurrence wins.
        unique = tuple(dict.fromkeys(self.source_files))
        object.__setattr__(self, "source_files", unique)
        object.__setattr__(self, "root", Path(self.root))

    @property
    def makefile_path(self) -> Path:
        return self.root / f"{self.name}.makefile"

    def absolute_path(self, relative: str) -> str:
        """Join a project-relative path onto the root, normalized with '/'."""
        joined = posixpath.join(
            Path(self.root).as_posix(), naming.normalize_path(relative)
        )
        return posixpath.normpath(joined)


@dataclass(frozen=True)
class WorkspaceOutput:
    project_name: str
    language: ProjectLanguage
    output_kind: OutputKind = Executable()


WorkspaceResolver: TypeAlias = Callable[[str], Optional[WorkspaceOutput]]


def no_workspace_outputs(path: str) -> Optional[WorkspaceOutput]:
    return None


def _resolver_key(path: str) -> str:
    return os.path.normcase(posixpath.normpath(naming.normalize_path(path)))


def mapping_resolver(outputs: Mapping[str, WorkspaceOutput]) -> WorkspaceResolver:
    """Answer workspace lookups from a mapping of output path to owner."""
    table = {_resolver_key(path): owner for path, owner in outputs.items()}

    def resolve(path: str) -> Optional[WorkspaceOutput]:
        return table.get(_resolver_key(path))

    return resolve


@dataclass(frozen=True)
class ProjectToolchain:
    c_compiler: str = DEFAULT_C_COMPILER
    cpp_compiler: str = DEFAULT_CPP_COMPILER
    cpp_folder_prefix: str = ""
    csharp_folder_prefix: str = ""

    def folder_prefix(self, language: ProjectLanguage) -> str:
        match language:
            case ProjectLanguage.CPP:
                return self.cpp_folder_prefix
            case ProjectLanguage.CSHARP:
                return self.csharp_folder_prefix


@dataclass(frozen=True)
class ToolchainConfig:
    c_compiler: str = DEFAULT_C_COMPILER
    cpp_compiler: str = DEFAULT_CPP_COMPILER
    platform: PlatformVariant = PlatformVariant.NATIVE
    projects: Mapping[str, ProjectToolchain] = field(default_factory=dict)

    def for_project(self, name: str) -> ProjectToolchain:
        settings = self.projects.get(name)
        if settings is not None:
            return settings
        return ProjectToolchain(c_compiler=self.c_compiler, cpp_compiler=self.cpp_compiler)

    def bind_output_kind(self, kind: OutputKind) -> OutputKind:
        """Fill in the platform of a shared library left unspecified."""
        if isinstance(kind, SharedLibrary) and kind.platform is None:
            return SharedLibrary(platform=self.platform)
        return kind
