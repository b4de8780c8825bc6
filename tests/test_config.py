import json
from pathlib import Path

from pymkgen import config
from pymkgen.model import PlatformVariant, ProjectToolchain


def _write_config(tmp_path: Path, data) -> Path:
    path = tmp_path / "pymkgen.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_apply_config_file_sets_fields(tmp_path):
    path = _write_config(
        tmp_path,
        {
            "c_compiler": "clang",
            "cpp_compiler": "clang++",
            "platform": "cygwin",
            "projects": {
                "hello": {"cpp_folder_prefix": "gcc", "csharp_folder_prefix": "mono"},
                "tools": {"cpp_compiler": "g++-13"},
            },
        },
    )
    manager = config.ToolchainConfigManager()

    result = config.apply_config_file(path, manager)

    assert result == 0
    assert manager.c_compiler == "clang"
    assert manager.cpp_compiler == "clang++"
    assert manager.platform is PlatformVariant.CYGWIN
    assert manager.config_path == path
    assert manager.projects["hello"] == {
        "cpp_folder_prefix": "gcc",
        "csharp_folder_prefix": "mono",
    }


def test_to_toolchain_inherits_global_compilers(tmp_path):
    manager = config.ToolchainConfigManager(c_compiler="clang", cpp_compiler="clang++")
    manager.set_project("hello", {"cpp_folder_prefix": "gcc"})
    manager.set_project("tools", {"cpp_compiler": "g++-13"})

    toolchain = manager.to_toolchain()

    assert toolchain.for_project("hello") == ProjectToolchain(
        c_compiler="clang", cpp_compiler="clang++", cpp_folder_prefix="gcc"
    )
    assert toolchain.for_project("tools").cpp_compiler == "g++-13"
    assert toolchain.for_project("tools").c_compiler == "clang"
    assert toolchain.for_project("unknown") == ProjectToolchain(
        c_compiler="clang", cpp_compiler="clang++"
    )


def test_apply_config_file_rejects_bad_platform(tmp_path, capsys):
    path = _write_config(tmp_path, {"platform": "solaris"})

    result = config.apply_config_file(path, config.ToolchainConfigManager())

    assert result == 1
    assert "config platform must be one of: cygwin, native" in capsys.readouterr().err


def test_apply_config_file_rejects_bad_project_entry(tmp_path):
    path = _write_config(tmp_path, {"projects": {"hello": {"cpp_compiler": ""}}})

    assert config.apply_config_file(path, config.ToolchainConfigManager()) == 1


def test_apply_config_file_rejects_non_object(tmp_path):
    path = _write_config(tmp_path, ["gcc"])

    assert config.apply_config_file(path, config.ToolchainConfigManager()) == 1


def test_apply_config_file_rejects_invalid_json(tmp_path):
    path = tmp_path / "pymkgen.json"
    path.write_text("{", encoding="utf-8")

    assert config.apply_config_file(path, config.ToolchainConfigManager()) == 1


def test_apply_env_overrides():
    manager = config.ToolchainConfigManager()

    result = config.apply_env_overrides(
        manager, {"CC": "clang", "CXX": "clang++", "PYMKGEN_PLATFORM": "Cygwin"}
    )

    assert result == 0
    assert manager.c_compiler == "clang"
    assert manager.cpp_compiler == "clang++"
    assert manager.platform is PlatformVariant.CYGWIN


def test_apply_env_overrides_rejects_unknown_platform():
    manager = config.ToolchainConfigManager()

    assert config.apply_env_overrides(manager, {"PYMKGEN_PLATFORM": "beos"}) == 1
    assert manager.platform is PlatformVariant.NATIVE


def test_round_trip_through_dict():
    manager = config.ToolchainConfigManager(platform=PlatformVariant.CYGWIN)
    manager.set_project("hello", {"cpp_folder_prefix": "gcc"})

    restored = config.ToolchainConfigManager.from_dict(manager.to_dict())

    assert restored.to_toolchain() == manager.to_toolchain()


def test_discover_config_path(tmp_path):
    root = tmp_path / "root"
    grandchild = root / "child" / "grandchild"
    grandchild.mkdir(parents=True)
    config_path = root / "pymkgen.json"
    config_path.write_text("{}", encoding="utf-8")

    result = config.discover_config_path(grandchild, ["pymkgen.json"])

    assert result == config_path.resolve()


def test_locate_config_file_prefers_explicit_path(tmp_path):
    explicit = config.locate_config_file("custom.json", {"PYMKGEN_CONFIG_FILE": "env.json"})
    from_env = config.locate_config_file(None, {"PYMKGEN_CONFIG_FILE": "env.json"})

    assert explicit == Path("custom.json")
    assert from_env == Path("env.json")
