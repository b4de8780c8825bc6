"""Exceptions raised while synthesizing a project makefile."""


class SynthesisError(RuntimeError):
    """Base class for failures detected while building a makefile."""


class DuplicateTargetError(SynthesisError):
    def __init__(self, target: str):
        super().__init__(f"target '{target}' is produced by more than one rule")
        self.target = target


class TargetCycleError(SynthesisError):
    def __init__(self, cycle: list[str]):
        super().__init__(f"target dependency cycle: {' -> '.join(cycle)}")
        self.cycle = cycle


class DuplicateOutputError(SynthesisError):
    def __init__(self, path: str, targets: list[str]):
        super().__init__(f"'{path}' is written by more than one target: {', '.join(targets)}")
        self.path = path
        self.targets = targets
