"""The link (or archive) command that finishes a configuration target."""

from typing import Sequence, assert_never

from . import naming
from .model import Executable, OutputKind, SharedLibrary, StaticLibrary


ARCHIVER_COMMAND = "ar rcs"
RUNTIME_SEARCH_PATH_FLAG = "-Wl,-rpath,./"
SHARED_FLAG = "-shared"
POSITION_INDEPENDENT_FLAG = "-fPIC"


def output_file_name(project: str, output_kind: OutputKind) -> str:
    match output_kind:
        case Executable():
            return naming.executable_name(project)
        case StaticLibrary():
            return naming.static_library_name(project)
        case SharedLibrary():
            return naming.shared_library_name(project, output_kind.extension)
        case _:
            assert_never(output_kind)


def output_path(project: str, output_kind: OutputKind, output_folder: str) -> str:
    return f"{output_folder}/{output_file_name(project, output_kind)}"


def _join(parts: Sequence[str]) -> str:
    return " ".join(part for part in parts if part)


def link_command(
    project: str,
    output_kind: OutputKind,
    configuration: str,
    output_folder: str,
    object_files: Sequence[str],
) -> str:
    output_name = output_file_name(project, output_kind)
    output = output_path(project, output_kind, output_folder)
    objects = " ".join(object_files)
    library_path = naming.reference(naming.library_path_variable(configuration))
    libraries = naming.reference(naming.libraries_variable(configuration))
    implicit_objects = naming.reference(
        naming.implicitly_linked_objects_variable(configuration)
    )
    compiler = naming.reference(naming.CPP_COMPILER_VARIABLE)

    match output_kind:
        case Executable():
            return _join(
                [
                    compiler,
                    objects,
                    library_path,
                    libraries,
                    RUNTIME_SEARCH_PATH_FLAG,
                    "-o",
                    output,
                ]
            )
        case StaticLibrary():
            return _join([ARCHIVER_COMMAND, output, objects, implicit_objects])
        case SharedLibrary():
            pic = POSITION_INDEPENDENT_FLAG if output_kind.position_independent else ""
            return _join(
                [
                    compiler,
                    pic,
                    SHARED_FLAG,
                    f"-Wl,-soname,{output_name}",
                    "-o",
                    output,
                    objects,
                    implicit_objects,
                    library_path,
                    libraries,
                ]
            )
        case _:
            assert_never(output_kind)
