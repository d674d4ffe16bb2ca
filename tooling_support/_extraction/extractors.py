"""Extraction of SquareDependency records from host configurations."""

from typing import Iterable, Iterator

from ..exceptions import UnsupportedDependencyError
from ..logging_config import logger
from .models import (
    NOT_RESOLVABLE,
    TRANSITIVE_TAG,
    Dependency,
    ExternalModuleDependency,
    ProjectComponentIdentifier,
    ProjectDependency,
    Resolution,
    Resolved,
    SquareDependency,
)
from .paths import path_to_key, resolve_path
from .protocol import Configuration, Project


class DeclaredDependencies:
    """Lazy view over the dependencies declared in a configuration.

    Every iteration re-reads the configuration, so later declarations are
    visible and the view can be iterated any number of times.
    """

    def __init__(self, configuration: Configuration) -> None:
        self._configuration = configuration

    def __iter__(self) -> Iterator[Dependency]:
        return iter(self._configuration.dependencies)

    def __repr__(self) -> str:
        return f"DeclaredDependencies({self._configuration.name!r})"


def extract_dependencies(configuration: Configuration) -> DeclaredDependencies:
    """List the raw dependencies declared in a configuration.

    No filtering is applied and resolution is never triggered.
    """
    return DeclaredDependencies(configuration)


def extract_square_dependency(dependency: Dependency, project: Project) -> SquareDependency:
    """Classify a declared dependency and convert it to a SquareDependency.

    External modules become ``@maven://group:name`` with no tags. Project
    references become the slash-delimited key of the referenced project
    (relative paths are resolved against ``project``) tagged ``transitive``,
    since depending on a project also pulls in that project's dependencies.

    Args:
        dependency: Declared dependency
        project: Project that declared the dependency

    Returns:
        The canonical record.

    Raises:
        UnsupportedDependencyError: If the dependency is of an unknown kind.
    """
    if isinstance(dependency, ExternalModuleDependency):
        return SquareDependency.external(dependency.group, dependency.name)

    if isinstance(dependency, ProjectDependency):
        path = resolve_path(dependency.dependency_project.path, project.path)
        return SquareDependency(target=path_to_key(path), tags={TRANSITIVE_TAG})

    raise UnsupportedDependencyError(
        f"Cannot classify dependency of type {type(dependency).__name__} declared in {project.path}"
    )


def resolve_configuration(configuration: Configuration) -> Resolution:
    """Resolve a configuration if, and only if, it is resolvable.

    Returns:
        NOT_RESOLVABLE without touching the host's resolution machinery, or
        Resolved with the artifacts returned by the host.
    """
    if not configuration.can_be_resolved:
        logger.debug(f"Configuration {configuration.name} cannot be resolved, skipping artifact inspection")
        return NOT_RESOLVABLE

    return Resolved.of(configuration.resolve())


def extract_project_dependencies_from_artifacts(
    configuration: Configuration,
    project: Project,
) -> Iterator[SquareDependency]:
    """Find the projects behind a configuration's resolved artifacts.

    Catches project dependencies that only become visible after resolution,
    such as projects of included builds substituted for external
    coordinates. Artifacts of external modules are skipped because the
    declared dependencies already cover them.

    Resolution happens on first iteration. Records carry no tags and are
    yielded once each, in first-seen order.

    Args:
        configuration: Configuration to inspect
        project: Project owning the configuration

    Yields:
        SquareDependency for every distinct project identity path.
    """
    resolution = resolve_configuration(configuration)
    if not isinstance(resolution, Resolved):
        return

    logger.debug(
        f"Inspecting {len(resolution.artifacts)} resolved artifacts of "
        f"{project.path} configuration {configuration.name}"
    )

    seen: set[SquareDependency] = set()
    for artifact in resolution.artifacts:
        identifier = artifact.component_identifier
        if not isinstance(identifier, ProjectComponentIdentifier):
            continue

        dependency = SquareDependency(target=path_to_key(identifier.identity_path))
        if dependency in seen:
            continue
        seen.add(dependency)
        yield dependency


def collect_square_dependencies(configuration: Configuration, project: Project) -> Iterator[SquareDependency]:
    """Collect every SquareDependency of a configuration.

    Declared dependencies come first, followed by project dependencies found
    in resolved artifacts. Duplicates are dropped.
    """
    seen: set[SquareDependency] = set()
    declared = (extract_square_dependency(d, project) for d in extract_dependencies(configuration))
    resolved = extract_project_dependencies_from_artifacts(configuration, project)

    for sources in (declared, resolved):
        for dependency in sources:
            if dependency in seen:
                continue
            seen.add(dependency)
            yield dependency


def extract_dependency_map(
    configurations: Iterable[Configuration],
    project: Project,
    include_resolved: bool = True,
) -> dict[str, list[SquareDependency]]:
    """Collect the dependencies of several configurations of one project.

    Args:
        configurations: Configurations owned by ``project``
        project: Owning project
        include_resolved: Also inspect resolved artifacts of resolvable
            configurations

    Returns:
        Mapping of configuration name to its dependencies, in configuration order.
    """
    result: dict[str, list[SquareDependency]] = {}
    for configuration in configurations:
        if include_resolved:
            dependencies = list(collect_square_dependencies(configuration, project))
        else:
            dependencies = list(
                dict.fromkeys(extract_square_dependency(d, project) for d in extract_dependencies(configuration))
            )
        logger.debug(f"Extracted {len(dependencies)} dependencies from {project.path} {configuration.name}")
        result[configuration.name] = dependencies
    return result
