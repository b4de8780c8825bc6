"""The target dependency graph of one project makefile."""

import posixpath
from dataclasses import dataclass, field
from graphlib import CycleError, TopologicalSorter
from typing import Iterator, Optional, Sequence

from .emitter import Blank, Comment, Rule, Statement
from .errors import DuplicateOutputError, DuplicateTargetError, TargetCycleError


@dataclass
class Target:
    name: str
    prerequisites: list[str] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)
    phony: bool = False
    comment: Optional[str] = None
    # Written between the comment and the rule, e.g. '-include' directives.
    directives: list[Statement] = field(default_factory=list)
    # A blank line follows the rule unless the next rule belongs with it.
    separated: bool = True
    # Files the recipe writes that are not named by the target, e.g. the link output.
    outputs: list[str] = field(default_factory=list)

    def statements(self) -> list[Statement]:
        result: list[Statement] = []
        if self.comment:
            result.append(Comment(self.comment))
        result.extend(self.directives)
        result.append(
            Rule(
                target=self.name,
                prerequisites=tuple(self.prerequisites),
                commands=tuple(self.commands),
                phony=self.phony,
            )
        )
        if self.separated:
            result.append(Blank())
        return result


class TargetGraph:
    """Targets in the order they are written, plus the raw sections between them.

    Prerequisites that are not targets themselves (source files) are leaves.
    """

    def __init__(self) -> None:
        self._targets: dict[str, Target] = {}
        self._layout: list[Target | Statement] = []
        self._outputs: dict[str, str] = {}

    def add_statements(self, statements: Sequence[Statement]) -> None:
        self._layout.extend(statements)

    def add_target(self, target: Target) -> Target:
        if target.name in self._targets:
            raise DuplicateTargetError(target.name)
        for output in target.outputs:
            owner = self._outputs.get(posixpath.normpath(output))
            if owner is not None:
                raise DuplicateOutputError(output, [owner, target.name])
        for output in target.outputs:
            self._outputs[posixpath.normpath(output)] = target.name
        self._targets[target.name] = target
        self._layout.append(target)
        return target

    def add_targets(self, targets: Sequence[Target]) -> None:
        for target in targets:
            self.add_target(target)

    def __contains__(self, name: str) -> bool:
        return name in self._targets

    def __iter__(self) -> Iterator[Target]:
        return iter(self._targets.values())

    def target(self, name: str) -> Target:
        return self._targets[name]

    def prerequisites(self, name: str) -> list[str]:
        return list(self._targets[name].prerequisites)

    def topological_order(self) -> list[str]:
        """Target names ordered so that prerequisites come first."""
        sorter = TopologicalSorter(
            {
                name: [dep for dep in target.prerequisites if dep in self._targets]
                for name, target in self._targets.items()
            }
        )
        try:
            return list(sorter.static_order())
        except CycleError as exc:
            raise TargetCycleError(list(exc.args[1])) from exc

    def validate(self) -> None:
        self.topological_order()

    def statements(self) -> list[Statement]:
        result: list[Statement] = []
        for item in self._layout:
            if isinstance(item, Target):
                result.extend(item.statements())
            else:
                result.append(item)
        return result
