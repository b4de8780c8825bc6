"""Object-file and dependency-file rules for each source file.

For ``main.cpp`` in the Debug configuration this produces::

    # Compiles file main.cpp for the Debug configuration...
    -include debug/main.d
    debug/main.o: main.cpp debug/main.d
    	mkdir -p debug
    	$(CPP_COMPILER) $(Debug_Preprocessor_Definitions) $(Debug_Compiler_Flags) -c main.cpp $(Debug_Include_Path) -o debug/main.o
    debug/main.d: main.cpp
    	mkdir -p debug
    	$(CPP_COMPILER) ... -MF"$@" -MG -MM -MP -MT"$@" -MT"debug/main.o" "$<"
    	sed -i -e 's/\\.d/\\.o/g' $@

The dependency file is listed as a prerequisite of the object file, so a
regenerated dependency file is enough to trigger a recompile.
"""

from . import naming
from .emitter import IncludeDirective
from .graph import Target
from .model import Configuration


DEPENDENCY_SCAN_FLAGS = '-MF"$@" -MG -MM -MP -MT"$@"'
# The scan names the dependency file as the target; point it at the object.
DEPENDENCY_REWRITE = "sed -i -e 's/\\.d/\\.o/g' $@"


def compiler_for(source: str) -> str:
    if naming.is_c_source(source):
        return naming.reference(naming.C_COMPILER_VARIABLE)
    return naming.reference(naming.CPP_COMPILER_VARIABLE)


def make_folder_command(folder: str) -> str:
    return f"mkdir -p {folder}"


def compile_command(configuration: str, source: str, object_path: str) -> str:
    return " ".join(
        [
            compiler_for(source),
            naming.reference(naming.preprocessor_definitions_variable(configuration)),
            naming.reference(naming.compiler_flags_variable(configuration)),
            "-c",
            source,
            naming.reference(naming.include_path_variable(configuration)),
            "-o",
            object_path,
        ]
    )


def dependency_scan_command(configuration: str, source: str, object_path: str) -> str:
    return " ".join(
        [
            compiler_for(source),
            naming.reference(naming.preprocessor_definitions_variable(configuration)),
            naming.reference(naming.compiler_flags_variable(configuration)),
            naming.reference(naming.include_path_variable(configuration)),
            DEPENDENCY_SCAN_FLAGS,
            f'-MT"{object_path}"',
            '"$<"',
        ]
    )


def compile_targets(
    configuration: Configuration, intermediate: str, source: str
) -> list[Target]:
    """The object target and its paired dependency target for one source."""
    name = configuration.identifier
    source = naming.normalize_path(source)
    object_path = naming.object_path(intermediate, source)
    dependency_path = naming.dependency_path(intermediate, source)
    object_target = Target(
        name=object_path,
        prerequisites=[source, dependency_path],
        commands=[
            make_folder_command(intermediate),
            compile_command(name, source, object_path),
        ],
        comment=f"Compiles file {source} for the {name} configuration...",
        directives=[IncludeDirective(dependency_path)],
        separated=False,
    )
    dependency_target = Target(
        name=dependency_path,
        prerequisites=[source],
        commands=[
            make_folder_command(intermediate),
            dependency_scan_command(name, source, object_path),
            DEPENDENCY_REWRITE,
        ],
    )
    return [object_target, dependency_target]
