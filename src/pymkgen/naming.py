"""Names of the variables, targets and files a project makefile refers to.

Everything here is a pure string function. Configuration names are expected
to already be identifier-safe; use :func:`sanitize_identifier` on anything
that came from a project file.
"""

import posixpath
import re


BUILD_ALL_TARGET = "build_all_configurations"
CREATE_FOLDERS_TARGET = "create_folders"
CLEAN_TARGET = "clean"

OBJECT_EXTENSION = ".o"
DEPENDENCY_EXTENSION = ".d"
C_SOURCE_EXTENSION = ".c"

C_COMPILER_VARIABLE = "C_COMPILER"
CPP_COMPILER_VARIABLE = "CPP_COMPILER"

_UNSAFE_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_]")
_SKIPPED_PREFIX_COMPONENTS = {"", ".", ".."}


def sanitize_identifier(name: str) -> str:
    return _UNSAFE_IDENTIFIER_CHARS.sub("_", name.strip())


def include_path_variable(configuration: str) -> str:
    return f"{configuration}_Include_Path"


def library_path_variable(configuration: str) -> str:
    return f"{configuration}_Library_Path"


def libraries_variable(configuration: str) -> str:
    return f"{configuration}_Libraries"


def preprocessor_definitions_variable(configuration: str) -> str:
    return f"{configuration}_Preprocessor_Definitions"


def implicitly_linked_objects_variable(configuration: str) -> str:
    return f"{configuration}_Implicitly_Linked_Objects"


def compiler_flags_variable(configuration: str) -> str:
    return f"{configuration}_Compiler_Flags"


def configuration_variables(configuration: str) -> list[str]:
    """All per-configuration variable names, in the order they are written."""
    return [
        include_path_variable(configuration),
        library_path_variable(configuration),
        libraries_variable(configuration),
        preprocessor_definitions_variable(configuration),
        implicitly_linked_objects_variable(configuration),
        compiler_flags_variable(configuration),
    ]


def reference(variable: str) -> str:
    return f"$({variable})"


def configuration_target(configuration: str) -> str:
    return configuration


def pre_build_target(configuration: str) -> str:
    return f"{configuration}_PreBuildEvent"


def custom_build_rule_target(configuration: str, rule_name: str, file: str) -> str:
    # e.g. Release_CustomBuildRule_Splitter_TextUtils.code
    file_name = posixpath.basename(normalize_path(file))
    return f"{configuration}_CustomBuildRule_{rule_name}_{file_name}"


def normalize_path(path: str) -> str:
    """Forward slashes only, no trailing slash."""
    normalized = path.replace("\\", "/")
    if len(normalized) > 1:
        normalized = normalized.rstrip("/") or "/"
    return normalized


def source_base_name(source: str) -> str:
    file_name = posixpath.basename(normalize_path(source))
    return posixpath.splitext(file_name)[0]


def source_extension(source: str) -> str:
    return posixpath.splitext(normalize_path(source))[1].lower()


def is_c_source(source: str) -> bool:
    return source_extension(source) == C_SOURCE_EXTENSION


def object_path(folder: str, source: str) -> str:
    return f"{folder}/{source_base_name(source)}{OBJECT_EXTENSION}"


def dependency_path(folder: str, source: str) -> str:
    return f"{folder}/{source_base_name(source)}{DEPENDENCY_EXTENSION}"


def executable_name(project: str) -> str:
    return f"{project}.exe"


def static_library_name(project: str) -> str:
    return f"lib{project}.a"


def shared_library_name(project: str, extension: str) -> str:
    return f"lib{project}{extension}"


def add_prefix_to_folder_path(path: str, prefix: str) -> str:
    """Insert ``prefix`` in front of the last folder of ``path``.

    ``../Debug`` with prefix ``gcc`` becomes ``../gccDebug``. Paths ending in
    ``.`` or ``..`` are returned unchanged since there is no folder name to
    decorate.
    """
    path = normalize_path(path)
    if not prefix:
        return path
    head, tail = posixpath.split(path)
    if tail in _SKIPPED_PREFIX_COMPONENTS:
        return path
    return posixpath.join(head, f"{prefix}{tail}")


def add_prefix_to_file_path(path: str, prefix: str) -> str:
    path = normalize_path(path)
    folder, file_name = posixpath.split(path)
    if not folder:
        return path
    return posixpath.join(add_prefix_to_folder_path(folder, prefix), file_name)


def quote_if_spaced(value: str) -> str:
    if any(char.isspace() for char in value):
        return f'"{value}"'
    return value
