"""The variable section at the top of a project makefile.

Every configuration gets its own set of variables so the rules of one
configuration never see the flags of another::

    Debug_Include_Path=-I../include
    Debug_Libraries=-Wl,--start-group -lmath -lutils -Wl,--end-group
"""

from typing import Callable, Sequence

from . import naming
from .emitter import Assignment, Blank, Comment, Statement
from .model import (
    CharacterSet,
    Configuration,
    Executable,
    OutputKind,
    Project,
    SharedLibrary,
    StaticLibrary,
    ToolchainConfig,
)


INCLUDE_FLAG = "-I"
LIBRARY_PATH_FLAG = "-L"
LIBRARY_FLAG = "-l"
DEFINE_FLAG = "-D "
UNICODE_DEFINITION = "UNICODE"
START_GROUP = "-Wl,--start-group"
END_GROUP = "-Wl,--end-group"
POSITION_INDEPENDENT_FLAG = "-fPIC"


def compiler_variables(project: Project, toolchain: ToolchainConfig) -> list[Statement]:
    settings = toolchain.for_project(project.name)
    return [
        Comment("Compilers..."),
        Assignment(naming.CPP_COMPILER_VARIABLE, settings.cpp_compiler, spaced=True),
        Assignment(naming.C_COMPILER_VARIABLE, settings.c_compiler, spaced=True),
        Blank(),
    ]


def include_path_value(configuration: Configuration) -> str:
    return " ".join(
        f"{INCLUDE_FLAG}{naming.quote_if_spaced(path)}"
        for path in configuration.include_paths
    )


def library_path_value(configuration: Configuration) -> str:
    return " ".join(
        f"{LIBRARY_PATH_FLAG}{naming.quote_if_spaced(path)}"
        for path in configuration.library_paths
    )


def libraries_value(configuration: Configuration) -> str:
    libraries = [f"{LIBRARY_FLAG}{name}" for name in configuration.libraries]
    if not libraries:
        return ""
    # Grouped so the linker rescans them for circular references.
    return " ".join([START_GROUP, *libraries, END_GROUP])


def preprocessor_definitions_value(configuration: Configuration) -> str:
    definitions = list(configuration.preprocessor_definitions)
    if configuration.character_set is CharacterSet.UNICODE:
        definitions.append(UNICODE_DEFINITION)
    return " ".join(f"{DEFINE_FLAG}{definition}" for definition in definitions)


def implicitly_linked_objects_value(configuration: Configuration) -> str:
    return " ".join(
        naming.quote_if_spaced(path) for path in configuration.implicitly_linked_objects
    )


def needs_position_independent_code(output_kind: OutputKind) -> bool:
    match output_kind:
        case SharedLibrary():
            return output_kind.position_independent
        case Executable() | StaticLibrary():
            return False


def compiler_flags_value(configuration: Configuration, output_kind: OutputKind) -> str:
    flags = list(configuration.compiler_flags)
    if needs_position_independent_code(output_kind):
        flags.insert(0, POSITION_INDEPENDENT_FLAG)
    return " ".join(flags)


def _section(
    comment: str,
    configurations: Sequence[Configuration],
    variable_name: Callable[[str], str],
    value: Callable[[Configuration], str],
) -> list[Statement]:
    statements: list[Statement] = [Comment(comment)]
    for configuration in configurations:
        statements.append(
            Assignment(variable_name(configuration.identifier), value(configuration))
        )
    statements.append(Blank())
    return statements


def build_variable_section(
    project: Project, toolchain: ToolchainConfig
) -> list[Statement]:
    """Compiler selection followed by one section per variable category."""
    configurations = project.configurations
    output_kind = project.output_kind
    statements = compiler_variables(project, toolchain)
    statements += _section(
        "Include paths...",
        configurations,
        naming.include_path_variable,
        include_path_value,
    )
    statements += _section(
        "Library paths...",
        configurations,
        naming.library_path_variable,
        library_path_value,
    )
    statements += _section(
        "Additional libraries...",
        configurations,
        naming.libraries_variable,
        libraries_value,
    )
    statements += _section(
        "Preprocessor definitions...",
        configurations,
        naming.preprocessor_definitions_variable,
        preprocessor_definitions_value,
    )
    statements += _section(
        "Implicitly linked object files...",
        configurations,
        naming.implicitly_linked_objects_variable,
        implicitly_linked_objects_value,
    )
    statements += _section(
        "Compiler flags...",
        configurations,
        naming.compiler_flags_variable,
        lambda configuration: compiler_flags_value(configuration, output_kind),
    )
    return statements
