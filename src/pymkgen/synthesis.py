"""Entry points turning a project model into its makefile."""

import dataclasses
from pathlib import Path

from .emitter import render, write_makefile
from .graph import TargetGraph
from .model import Project, ToolchainConfig, WorkspaceResolver, no_workspace_outputs
from .targets import build_target_graph as _build_target_graph


def bind_project(project: Project, toolchain: ToolchainConfig) -> Project:
    output_kind = toolchain.bind_output_kind(project.output_kind)
    if output_kind == project.output_kind:
        return project
    return dataclasses.replace(project, output_kind=output_kind)


def build_target_graph(
    project: Project,
    toolchain: ToolchainConfig,
    resolver: WorkspaceResolver = no_workspace_outputs,
) -> TargetGraph:
    return _build_target_graph(bind_project(project, toolchain), toolchain, resolver)


def synthesize(
    project: Project,
    toolchain: ToolchainConfig,
    resolver: WorkspaceResolver = no_workspace_outputs,
) -> str:
    """Return the makefile text for ``project``.

    The same inputs always give the same text.
    """
    return render(build_target_graph(project, toolchain, resolver).statements())


def write_project_makefile(
    project: Project,
    toolchain: ToolchainConfig,
    resolver: WorkspaceResolver = no_workspace_outputs,
) -> Path:
    """Write ``{root}/{name}.makefile`` and return its path.

    Raises :class:`~pymkgen.errors.SynthesisError` for an inconsistent target
    graph and ``OSError`` when the file cannot be written; either way nothing
    is left at the destination from this run.
    """
    graph = build_target_graph(project, toolchain, resolver)
    return write_makefile(project.makefile_path, graph.statements())
