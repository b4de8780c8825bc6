import dataclasses

from pymkgen import variables
from pymkgen.emitter import Assignment, render
from pymkgen.model import (
    CharacterSet,
    Configuration,
    Executable,
    PlatformVariant,
    ProjectToolchain,
    SharedLibrary,
    StaticLibrary,
    ToolchainConfig,
)


def _configuration(**overrides) -> Configuration:
    return dataclasses.replace(
        Configuration(name="Debug", intermediate_folder="debug", output_folder="output"),
        **overrides,
    )


def test_include_paths_are_prefixed_and_quoted_when_spaced():
    configuration = _configuration(include_paths=("include", "third party/include"))

    assert variables.include_path_value(configuration) == (
        '-Iinclude -I"third party/include"'
    )


def test_library_paths_are_prefixed():
    configuration = _configuration(library_paths=("lib", "C:/Program Files/lib"))

    assert variables.library_path_value(configuration) == '-Llib -L"C:/Program Files/lib"'


def test_libraries_are_grouped():
    configuration = _configuration(libraries=("math", "utils"))

    assert variables.libraries_value(configuration) == (
        "-Wl,--start-group -lmath -lutils -Wl,--end-group"
    )


def test_empty_libraries_never_emit_an_empty_group(hello_project, toolchain):
    text = render(variables.build_variable_section(hello_project, toolchain))

    assert "Debug_Libraries=\n" in text
    assert "--start-group" not in text


def test_unicode_definition_is_appended_even_when_present():
    configuration = _configuration(
        preprocessor_definitions=("_DEBUG", "UNICODE"),
        character_set=CharacterSet.UNICODE,
    )

    assert variables.preprocessor_definitions_value(configuration) == (
        "-D _DEBUG -D UNICODE -D UNICODE"
    )


def test_multi_byte_configuration_has_no_unicode_definition():
    configuration = _configuration(
        preprocessor_definitions=("_DEBUG",), character_set=CharacterSet.MULTI_BYTE
    )

    assert variables.preprocessor_definitions_value(configuration) == "-D _DEBUG"


def test_implicitly_linked_objects_are_quoted_when_spaced():
    configuration = _configuration(implicitly_linked_objects=("a.o", "my dir/b.o"))

    assert variables.implicitly_linked_objects_value(configuration) == 'a.o "my dir/b.o"'


def test_compiler_flags_get_pic_only_for_native_shared_libraries():
    configuration = _configuration(compiler_flags=("-g", "-O0"))

    native = SharedLibrary(PlatformVariant.NATIVE)
    cygwin = SharedLibrary(PlatformVariant.CYGWIN)
    assert variables.compiler_flags_value(configuration, native) == "-fPIC -g -O0"
    assert variables.compiler_flags_value(configuration, cygwin) == "-g -O0"
    assert variables.compiler_flags_value(configuration, Executable()) == "-g -O0"
    assert variables.compiler_flags_value(configuration, StaticLibrary()) == "-g -O0"


def test_compiler_variables_come_from_project_settings(hello_project):
    toolchain = ToolchainConfig(
        projects={"hello": ProjectToolchain(c_compiler="clang", cpp_compiler="clang++")}
    )

    statements = variables.compiler_variables(hello_project, toolchain)

    assert Assignment("CPP_COMPILER", "clang++", spaced=True) in statements
    assert Assignment("C_COMPILER", "clang", spaced=True) in statements


def test_variable_section_layout(hello_project, toolchain):
    text = render(variables.build_variable_section(hello_project, toolchain))

    assert text.startswith("# Compilers...\nCPP_COMPILER = g++\nC_COMPILER = gcc\n\n")
    sections = [
        "# Include paths...",
        "# Library paths...",
        "# Additional libraries...",
        "# Preprocessor definitions...",
        "# Implicitly linked object files...",
        "# Compiler flags...",
    ]
    positions = [text.index(section) for section in sections]
    assert positions == sorted(positions)
    for name in ("Include_Path", "Library_Path", "Compiler_Flags"):
        assert f"Debug_{name}=" in text
