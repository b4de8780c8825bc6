"""Builds the target graph of a project makefile.

The phases run in a fixed order and each one appends a contiguous section:

1. the variable section,
2. ``build_all_configurations``,
3. per configuration: pre-build target, custom build rule targets, the
   configuration target itself, then the compile rules of every source,
4. ``create_folders``,
5. ``clean``.
"""

from . import naming
from .compile_rules import compile_targets, make_folder_command
from .graph import Target, TargetGraph
from .link_rules import link_command, output_path
from .model import (
    Configuration,
    CustomBuildRule,
    Executable,
    Project,
    ToolchainConfig,
    WorkspaceResolver,
)
from .variables import build_variable_section


CLEAN_PATTERNS_INTERMEDIATE = ("*.o", "*.d")
# Static libraries, shared objects (.so, or .dll on cygwin) and executables.
CLEAN_PATTERNS_OUTPUT = ("*.a", "*.so", "*.dll", "*.exe")


def intermediate_folder(
    project: Project, configuration: Configuration, toolchain: ToolchainConfig
) -> str:
    prefix = toolchain.for_project(project.name).cpp_folder_prefix
    return naming.add_prefix_to_folder_path(configuration.intermediate_folder, prefix)


def output_folder(
    project: Project, configuration: Configuration, toolchain: ToolchainConfig
) -> str:
    prefix = toolchain.for_project(project.name).cpp_folder_prefix
    return naming.add_prefix_to_folder_path(configuration.output_folder, prefix)


def object_files(
    project: Project, configuration: Configuration, toolchain: ToolchainConfig
) -> list[str]:
    folder = intermediate_folder(project, configuration, toolchain)
    return [naming.object_path(folder, source) for source in project.source_files]


def aggregate_target(project: Project) -> Target:
    names = dict.fromkeys(
        naming.configuration_target(configuration.identifier)
        for configuration in project.configurations
    )
    return Target(
        name=naming.BUILD_ALL_TARGET,
        prerequisites=list(names),
        phony=True,
        comment="Builds all configurations for this project...",
    )


def pre_build_target(configuration: Configuration) -> Target | None:
    if not configuration.pre_build_event:
        return None
    return Target(
        name=naming.pre_build_target(configuration.identifier),
        commands=[configuration.pre_build_event],
        phony=True,
        comment="Pre-build step...",
    )


def custom_rule_folder_prefix(
    project: Project,
    rule: CustomBuildRule,
    toolchain: ToolchainConfig,
    resolver: WorkspaceResolver,
) -> str:
    """Folder prefix of the project that builds the rule's executable, if any.

    When another project in the workspace produces the executable, its path
    carries that project's prefix rather than ours. Library outputs of other
    projects are never remapped.
    """
    owner = resolver(project.absolute_path(rule.executable))
    if owner is None or not isinstance(owner.output_kind, Executable):
        return ""
    return toolchain.for_project(owner.project_name).folder_prefix(owner.language)


def custom_build_rule_target(
    project: Project,
    configuration: Configuration,
    rule: CustomBuildRule,
    toolchain: ToolchainConfig,
    resolver: WorkspaceResolver,
) -> Target:
    prefix = custom_rule_folder_prefix(project, rule, toolchain, resolver)
    return Target(
        name=naming.custom_build_rule_target(
            configuration.identifier, rule.rule_name, rule.file
        ),
        commands=[rule.command_line(prefix)],
        phony=True,
        comment=f"Custom build rule for {naming.normalize_path(rule.file)}",
    )


def configuration_target(
    project: Project,
    configuration: Configuration,
    toolchain: ToolchainConfig,
    step_targets: list[Target],
) -> Target:
    name = configuration.identifier
    objects = object_files(project, configuration, toolchain)
    folder = output_folder(project, configuration, toolchain)
    commands = [link_command(project.name, project.output_kind, name, folder, objects)]
    if configuration.post_build_event:
        commands.append(configuration.post_build_event)
    return Target(
        name=naming.configuration_target(name),
        prerequisites=[naming.CREATE_FOLDERS_TARGET]
        + [target.name for target in step_targets]
        + objects,
        commands=commands,
        phony=True,
        comment=f"Builds the {name} configuration...",
        outputs=[output_path(project.name, project.output_kind, folder)],
    )


def add_configuration_targets(
    graph: TargetGraph,
    project: Project,
    configuration: Configuration,
    toolchain: ToolchainConfig,
    resolver: WorkspaceResolver,
) -> None:
    step_targets = []
    pre_build = pre_build_target(configuration)
    if pre_build is not None:
        step_targets.append(pre_build)
    for rule in configuration.custom_build_rules:
        step_targets.append(
            custom_build_rule_target(project, configuration, rule, toolchain, resolver)
        )
    graph.add_targets(step_targets)
    graph.add_target(configuration_target(project, configuration, toolchain, step_targets))

    folder = intermediate_folder(project, configuration, toolchain)
    for source in project.source_files:
        graph.add_targets(compile_targets(configuration, folder, source))


def create_folders_target(project: Project, toolchain: ToolchainConfig) -> Target:
    commands = []
    for configuration in project.configurations:
        intermediate = intermediate_folder(project, configuration, toolchain)
        output = output_folder(project, configuration, toolchain)
        commands.append(make_folder_command(intermediate))
        if output != intermediate:
            commands.append(make_folder_command(output))
    return Target(
        name=naming.CREATE_FOLDERS_TARGET,
        commands=commands,
        phony=True,
        comment="Creates the intermediate and output folders for each configuration...",
    )


def clean_target(project: Project, toolchain: ToolchainConfig) -> Target:
    commands = []
    for configuration in project.configurations:
        intermediate = intermediate_folder(project, configuration, toolchain)
        output = output_folder(project, configuration, toolchain)
        commands.extend(
            f"rm -f {intermediate}/{pattern}" for pattern in CLEAN_PATTERNS_INTERMEDIATE
        )
        commands.extend(f"rm -f {output}/{pattern}" for pattern in CLEAN_PATTERNS_OUTPUT)
    return Target(
        name=naming.CLEAN_TARGET,
        commands=commands,
        phony=True,
        comment="Cleans intermediate and output files (objects, libraries, executables)...",
    )


def build_target_graph(
    project: Project, toolchain: ToolchainConfig, resolver: WorkspaceResolver
) -> TargetGraph:
    """Lay out every section of the makefile for ``project``.

    ``project.output_kind`` must already be bound to a platform, see
    :meth:`ToolchainConfig.bind_output_kind`.
    """
    graph = TargetGraph()
    graph.add_statements(build_variable_section(project, toolchain))
    graph.add_target(aggregate_target(project))
    for configuration in project.configurations:
        add_configuration_targets(graph, project, configuration, toolchain, resolver)
    graph.add_target(create_folders_target(project, toolchain))
    graph.add_target(clean_target(project, toolchain))
    graph.validate()
    return graph
