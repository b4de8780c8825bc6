from pymkgen import naming


def test_configuration_variable_names():
    assert naming.configuration_variables("Debug") == [
        "Debug_Include_Path",
        "Debug_Library_Path",
        "Debug_Libraries",
        "Debug_Preprocessor_Definitions",
        "Debug_Implicitly_Linked_Objects",
        "Debug_Compiler_Flags",
    ]


def test_target_names():
    assert naming.configuration_target("Release") == "Release"
    assert naming.pre_build_target("Release") == "Release_PreBuildEvent"
    assert (
        naming.custom_build_rule_target("Release", "Splitter", "text/TextUtils.code")
        == "Release_CustomBuildRule_Splitter_TextUtils.code"
    )


def test_names_of_distinct_configurations_never_collide():
    def all_names(configuration):
        return set(naming.configuration_variables(configuration)) | {
            naming.configuration_target(configuration),
            naming.pre_build_target(configuration),
            naming.custom_build_rule_target(configuration, "Rule", "a.txt"),
        }

    configurations = ["Debug", "Release", "Debug_x64", "Release_Win32"]
    for first in configurations:
        for second in configurations:
            if first != second:
                assert not all_names(first) & all_names(second)


def test_sanitize_identifier_replaces_unsafe_characters():
    assert naming.sanitize_identifier("Debug|Win32") == "Debug_Win32"
    assert naming.sanitize_identifier(" Release ") == "Release"
    assert naming.sanitize_identifier("") == ""


def test_object_and_dependency_paths_use_base_name():
    assert naming.object_path("debug", "src/main.cpp") == "debug/main.o"
    assert naming.dependency_path("debug", "src\\main.cpp") == "debug/main.d"


def test_is_c_source_ignores_case():
    assert naming.is_c_source("util.c")
    assert naming.is_c_source("UTIL.C")
    assert not naming.is_c_source("util.cc")
    assert not naming.is_c_source("util.cpp")


def test_add_prefix_to_folder_path():
    assert naming.add_prefix_to_folder_path("../Debug", "gcc") == "../gccDebug"
    assert naming.add_prefix_to_folder_path("debug", "gcc") == "gccdebug"
    assert naming.add_prefix_to_folder_path("out\\debug\\", "gcc") == "out/gccdebug"
    assert naming.add_prefix_to_folder_path("debug", "") == "debug"
    assert naming.add_prefix_to_folder_path("..", "gcc") == ".."


def test_add_prefix_to_file_path():
    assert (
        naming.add_prefix_to_file_path("../tools/Release/splitter.exe", "mono")
        == "../tools/monoRelease/splitter.exe"
    )
    assert naming.add_prefix_to_file_path("splitter.exe", "mono") == "splitter.exe"


def test_quote_if_spaced():
    assert naming.quote_if_spaced("include") == "include"
    assert naming.quote_if_spaced("my include") == '"my include"'
