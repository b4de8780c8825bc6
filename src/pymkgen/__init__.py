"""Generate GNU makefiles for native C/C++ projects."""

from .errors import (
    DuplicateOutputError,
    DuplicateTargetError,
    SynthesisError,
    TargetCycleError,
)
from .model import (
    CharacterSet,
    Configuration,
    CustomBuildRule,
    Executable,
    PlatformVariant,
    Project,
    ProjectLanguage,
    ProjectToolchain,
    SharedLibrary,
    StaticLibrary,
    ToolchainConfig,
    WorkspaceOutput,
    mapping_resolver,
    no_workspace_outputs,
)
from .synthesis import build_target_graph, synthesize, write_project_makefile

__all__ = [
    "CharacterSet",
    "Configuration",
    "CustomBuildRule",
    "DuplicateOutputError",
    "DuplicateTargetError",
    "Executable",
    "PlatformVariant",
    "Project",
    "ProjectLanguage",
    "ProjectToolchain",
    "SharedLibrary",
    "StaticLibrary",
    "SynthesisError",
    "TargetCycleError",
    "ToolchainConfig",
    "WorkspaceOutput",
    "build_target_graph",
    "mapping_resolver",
    "no_workspace_outputs",
    "synthesize",
    "write_project_makefile",
]
