"""Dependency extraction and normalization.

Turns the dependency objects of a host build (declared external modules,
project references and resolved artifacts) into ``SquareDependency``
records: a target string plus a set of tags, independent of the host's
object model.

Example usage:
    from tooling_support._extraction import (
        extract_dependencies,
        extract_project_dependencies_from_artifacts,
        extract_square_dependency,
    )

    declared = [extract_square_dependency(d, project) for d in extract_dependencies(configuration)]
    resolved = list(extract_project_dependencies_from_artifacts(configuration, project))

Note:
    The host is only read. Resolution is triggered solely for configurations
    that declare themselves resolvable, and host resolution errors propagate.
"""

from .extractors import (
    DeclaredDependencies,
    collect_square_dependencies,
    extract_dependencies,
    extract_dependency_map,
    extract_project_dependencies_from_artifacts,
    extract_square_dependency,
    resolve_configuration,
)
from .models import (
    DEPENDENCY_TYPES,
    NOT_RESOLVABLE,
    TRANSITIVE_TAG,
    ComponentIdentifier,
    Dependency,
    ExternalModuleDependency,
    ModuleComponentIdentifier,
    NotResolvable,
    ProjectComponentIdentifier,
    ProjectDependency,
    Resolution,
    Resolved,
    ResolvedArtifact,
    SquareDependency,
)
from .paths import key_to_path, path_to_key, resolve_path
from .protocol import Configuration, Project

__all__ = [
    # Main API
    "extract_dependencies",
    "extract_square_dependency",
    "extract_project_dependencies_from_artifacts",
    "collect_square_dependencies",
    "extract_dependency_map",
    "resolve_configuration",
    "DeclaredDependencies",
    # Protocols
    "Configuration",
    "Project",
    # Models
    "SquareDependency",
    "TRANSITIVE_TAG",
    "Dependency",
    "DEPENDENCY_TYPES",
    "ExternalModuleDependency",
    "ProjectDependency",
    "ComponentIdentifier",
    "ModuleComponentIdentifier",
    "ProjectComponentIdentifier",
    "ResolvedArtifact",
    "Resolution",
    "Resolved",
    "NotResolvable",
    "NOT_RESOLVABLE",
    # Paths
    "path_to_key",
    "key_to_path",
    "resolve_path",
]
