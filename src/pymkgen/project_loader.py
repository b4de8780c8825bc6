"""Reads a JSON project description into a :class:`~pymkgen.model.Project`."""

import json
from pathlib import Path
from typing import Any, Optional, TypeAlias

from .console import error
from .model import (
    DEFAULT_COMMAND_TEMPLATE,
    CharacterSet,
    Configuration,
    CustomBuildRule,
    Executable,
    OutputKind,
    Project,
    ProjectLanguage,
    SharedLibrary,
    StaticLibrary,
    WorkspaceOutput,
    WorkspaceResolver,
    mapping_resolver,
)
from .validation import (
    validate_choice,
    validate_non_empty_string,
    validate_object,
    validate_optional_string,
    validate_string_list,
)


OUTPUT_KIND_CHOICES: dict[str, OutputKind] = {
    "executable": Executable(),
    "static_library": StaticLibrary(),
    "shared_library": SharedLibrary(),
}
CHARACTER_SET_CHOICES = {variant.value: variant for variant in CharacterSet}
LANGUAGE_CHOICES = {language.value: language for language in ProjectLanguage}

CONFIGURATION_LIST_FIELDS = (
    "include_paths",
    "library_paths",
    "libraries",
    "preprocessor_definitions",
    "compiler_flags",
    "implicitly_linked_objects",
)

LoadedProject: TypeAlias = tuple[Project, WorkspaceResolver]


def _load_custom_rule(entry: Any, field_name: str) -> Optional[CustomBuildRule]:
    result, rule = validate_object(entry, field_name)
    if result or rule is None:
        if rule is None and not result:
            error(f"{field_name} must be a JSON object")
        return None
    values = {}
    for key in ("rule_name", "file", "executable"):
        result, validated = validate_non_empty_string(rule.get(key), f"{field_name}.{key}")
        if result:
            return None
        if validated is None:
            error(f"{field_name}.{key} is required")
            return None
        values[key] = validated
    result, command = validate_optional_string(rule.get("command"), f"{field_name}.command")
    if result:
        return None
    return CustomBuildRule(
        rule_name=values["rule_name"],
        file=values["file"],
        executable=values["executable"],
        command_template=command or DEFAULT_COMMAND_TEMPLATE,
    )


def _load_configuration(entry: Any, index: int) -> Optional[Configuration]:
    field_name = f"project configurations[{index}]"
    if not isinstance(entry, dict):
        error(f"{field_name} must be a JSON object")
        return None

    strings = {}
    for key in ("name", "intermediate_folder", "output_folder"):
        result, validated = validate_non_empty_string(entry.get(key), f"{field_name}.{key}")
        if result:
            return None
        if validated is None:
            error(f"{field_name}.{key} is required")
            return None
        strings[key] = validated

    lists: dict[str, tuple[str, ...]] = {}
    for key in CONFIGURATION_LIST_FIELDS:
        result, validated_list = validate_string_list(entry.get(key), f"{field_name}.{key}")
        if result:
            return None
        lists[key] = tuple(validated_list or ())

    events = {}
    for key in ("pre_build_event", "post_build_event"):
        result, validated = validate_optional_string(entry.get(key), f"{field_name}.{key}")
        if result:
            return None
        events[key] = (validated or "").strip()

    result, character_set = validate_choice(
        entry.get("character_set"), f"{field_name}.character_set", CHARACTER_SET_CHOICES
    )
    if result:
        return None

    rules_value = entry.get("custom_build_rules")
    if rules_value is not None and not isinstance(rules_value, list):
        error(f"{field_name}.custom_build_rules must be a list of objects")
        return None
    rules = []
    for rule_index, rule_entry in enumerate(rules_value or []):
        rule = _load_custom_rule(
            rule_entry, f"{field_name}.custom_build_rules[{rule_index}]"
        )
        if rule is None:
            return None
        rules.append(rule)

    return Configuration(
        name=strings["name"],
        intermediate_folder=strings["intermediate_folder"],
        output_folder=strings["output_folder"],
        character_set=character_set or CharacterSet.NOT_SET,
        pre_build_event=events["pre_build_event"],
        post_build_event=events["post_build_event"],
        custom_build_rules=tuple(rules),
        **lists,
    )


def _load_workspace_outputs(value: Any, root: Path) -> Optional[WorkspaceResolver]:
    result, outputs = validate_object(value, "project workspace_outputs")
    if result:
        return None
    table = {}
    for path, entry in (outputs or {}).items():
        field_name = f"project workspace_outputs[{path}]"
        result, owner = validate_object(entry, field_name)
        if result or owner is None:
            if owner is None and not result:
                error(f"{field_name} must be a JSON object")
            return None
        result, project_name = validate_non_empty_string(
            owner.get("project"), f"{field_name}.project"
        )
        if result or project_name is None:
            if project_name is None and not result:
                error(f"{field_name}.project is required")
            return None
        result, language = validate_choice(
            owner.get("language", ProjectLanguage.CPP.value),
            f"{field_name}.language",
            LANGUAGE_CHOICES,
        )
        if result or language is None:
            return None
        result, output_kind = validate_choice(
            owner.get("output_kind", "executable"),
            f"{field_name}.output_kind",
            OUTPUT_KIND_CHOICES,
        )
        if result or output_kind is None:
            return None
        table[(root / path).as_posix()] = WorkspaceOutput(project_name, language, output_kind)
    return mapping_resolver(table)


def project_from_dict(data: Any, base_dir: Path) -> Optional[LoadedProject]:
    """Build the project and its workspace resolver from decoded JSON.

    Returns None after printing an error when the description is invalid.
    """
    if not isinstance(data, dict):
        error("project description must be a JSON object")
        return None

    result, name = validate_non_empty_string(data.get("name"), "project name")
    if result:
        return None
    if name is None:
        error("project name is required")
        return None

    result, root_value = validate_non_empty_string(data.get("root"), "project root")
    if result:
        return None
    root = Path(root_value).expanduser() if root_value else Path(".")
    if not root.is_absolute():
        root = base_dir / root

    result, output_kind = validate_choice(
        data.get("output_kind"), "project output_kind", OUTPUT_KIND_CHOICES
    )
    if result:
        return None
    if output_kind is None:
        error("project output_kind is required")
        return None

    result, sources = validate_string_list(data.get("source_files"), "project source_files")
    if result:
        return None

    configurations_value = data.get("configurations")
    if not isinstance(configurations_value, list) or not configurations_value:
        error("project configurations must be a non-empty list of objects")
        return None
    configurations = []
    for index, entry in enumerate(configurations_value):
        configuration = _load_configuration(entry, index)
        if configuration is None:
            return None
        configurations.append(configuration)

    resolver = _load_workspace_outputs(data.get("workspace_outputs"), root)
    if resolver is None:
        return None

    project = Project(
        name=name,
        root=root,
        output_kind=output_kind,
        source_files=tuple(sources or ()),
        configurations=tuple(configurations),
    )
    return project, resolver


def load_project_file(path: Path) -> Optional[LoadedProject]:
    """Load a JSON project description; ``root`` is relative to the file."""
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as exc:
        error(f"failed to read project file {path}: {exc}")
        return None
    try:
        data = json.loads(contents)
    except json.JSONDecodeError as exc:
        error(f"invalid JSON in {path}: {exc}")
        return None
    return project_from_dict(data, path.resolve().parent)
