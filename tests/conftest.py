import sys
from pathlib import Path

import pytest  # type: ignore[import-not-found]

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from pymkgen.model import (  # noqa: E402
    Configuration,
    Executable,
    Project,
    ToolchainConfig,
)


@pytest.fixture(autouse=True)
def clean_toolchain_env(monkeypatch):
    for name in ("CC", "CXX", "PYMKGEN_PLATFORM", "PYMKGEN_CONFIG_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def debug_configuration() -> Configuration:
    return Configuration(
        name="Debug",
        intermediate_folder="debug",
        output_folder="output",
    )


@pytest.fixture
def hello_project(tmp_path, debug_configuration) -> Project:
    return Project(
        name="hello",
        root=tmp_path,
        output_kind=Executable(),
        source_files=("main.cpp", "math.cpp"),
        configurations=(debug_configuration,),
    )


@pytest.fixture
def toolchain() -> ToolchainConfig:
    return ToolchainConfig()


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--type",
        action="store",
        default="all",
        choices=("unit", "integration", "all"),
        help="Select which tests to run: unit, integration, or all.",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    selected = config.getoption("--type")
    if selected == "all":
        return

    skip_integration = pytest.mark.skip(reason="skipped by --type unit")
    skip_unit = pytest.mark.skip(reason="skipped by --type integration")

    for item in items:
        is_integration = item.get_closest_marker("integration") is not None
        if selected == "unit" and is_integration:
            item.add_marker(skip_integration)
        elif selected == "integration" and not is_integration:
            item.add_marker(skip_unit)
