"""Load an in-memory build tree from a YAML or JSON build description.

Example description:

    name: root
    projects:
      - name: app
        configurations:
          implementation:
            resolvable: false
            dependencies:
              - com.squareup:foo:1.0
              - project: ":lib"
              - project: ":project:path"
                build: includeBuild
      - name: lib
    included_builds:
      - name: includeBuild
        projects:
          - name: project
            projects:
              - name: path
"""

import json
from pathlib import Path
from typing import Any

import yaml

from ..exceptions import BuildDescriptionError
from ..logging_config import logger
from .._extraction.models import Dependency, ProjectDependency
from .models import InMemoryConfiguration, InMemoryProject, parse_dependency_notation

YAML_SUFFIXES = (".yml", ".yaml")


def load_build_description(path: str | Path) -> InMemoryProject:
    """Load a build description file.

    Args:
        path: Path to a ``.json``, ``.yml`` or ``.yaml`` file

    Returns:
        Root project of the primary build.

    Raises:
        BuildDescriptionError: If the file cannot be read or is malformed.
    """
    file_path = Path(path)
    try:
        with file_path.open("r", encoding="utf-8") as f:
            if file_path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except OSError as e:
        raise BuildDescriptionError(f"Cannot read build description {file_path}: {e}") from e
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BuildDescriptionError(f"Cannot parse build description {file_path}: {e}") from e

    root = build_from_description(data)
    logger.debug(f"Loaded build {root.name} with {len(root.all_projects())} projects from {file_path}")
    return root


def build_from_description(data: Any) -> InMemoryProject:
    """Build the in-memory tree from already-parsed description data."""
    if not isinstance(data, dict):
        raise BuildDescriptionError("Build description must be a mapping")

    root = _new_root(_require_name(data, "build"))
    _add_projects(root, data.get("projects") or [])

    included: dict[str, InMemoryProject] = {}
    for build in data.get("included_builds") or []:
        if not isinstance(build, dict):
            raise BuildDescriptionError("Each included build must be a mapping")
        name = _require_name(build, "included build")
        if name in included:
            raise BuildDescriptionError(f"Duplicate included build: {name}")
        included[name] = _new_root(name, build_name=name)
        _add_projects(included[name], build.get("projects") or [])

    # Dependencies are wired after all projects exist so references can point forward
    _add_configurations(root, data, root, included)
    _wire_configurations(root, data.get("projects") or [], root, included)
    for build in data.get("included_builds") or []:
        included_root = included[build["name"]]
        _add_configurations(included_root, build, included_root, included)
        _wire_configurations(included_root, build.get("projects") or [], included_root, included)

    return root


def _require_name(entry: dict, kind: str) -> str:
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise BuildDescriptionError(f"Every {kind} needs a non-empty 'name'")
    return name


def _new_root(name: str, build_name: str | None = None) -> InMemoryProject:
    try:
        return InMemoryProject(name, build_name=build_name)
    except ValueError as e:
        raise BuildDescriptionError(str(e)) from e


def _optional_flag(entry: dict, key: str, default: bool, owner: str) -> bool:
    value = entry.get(key, default)
    if not isinstance(value, bool):
        raise BuildDescriptionError(f"'{key}' of {owner} must be true or false, got {value!r}")
    return value


def _add_projects(parent: InMemoryProject, entries: list) -> None:
    seen: set[str] = set()
    for entry in entries:
        if not isinstance(entry, dict):
            raise BuildDescriptionError(f"Project entries of {parent.path} must be mappings")
        name = _require_name(entry, "project")
        if name in seen:
            raise BuildDescriptionError(f"Duplicate project {name} in {parent.path}")
        seen.add(name)
        try:
            child = parent.child(name)
        except ValueError as e:
            raise BuildDescriptionError(str(e)) from e
        child.produces_artifacts = _optional_flag(entry, "artifacts", True, f"project {child.path}")
        _add_projects(child, entry.get("projects") or [])


def _wire_configurations(
    parent: InMemoryProject,
    entries: list,
    build_root: InMemoryProject,
    included: dict[str, InMemoryProject],
) -> None:
    for entry in entries:
        child = parent.child(entry["name"])
        _add_configurations(child, entry, build_root, included)
        _wire_configurations(child, entry.get("projects") or [], build_root, included)


def _add_configurations(
    project: InMemoryProject,
    entry: dict,
    build_root: InMemoryProject,
    included: dict[str, InMemoryProject],
) -> None:
    configurations = entry.get("configurations") or {}
    if not isinstance(configurations, dict):
        raise BuildDescriptionError(f"Configurations of {project.path} must be a mapping of name to settings")

    for name, settings in configurations.items():
        settings = settings or {}
        if not isinstance(settings, dict):
            raise BuildDescriptionError(f"Configuration {name} of {project.path} must be a mapping")

        resolvable = _optional_flag(settings, "resolvable", True, f"configuration {name} of {project.path}")
        try:
            configuration = project.create_configuration(str(name), can_be_resolved=resolvable)
        except ValueError as e:
            raise BuildDescriptionError(str(e)) from e
        for item in settings.get("dependencies") or []:
            configuration.add_dependency(_parse_dependency(item, configuration, build_root, included))


def _parse_dependency(
    item: Any,
    configuration: InMemoryConfiguration,
    build_root: InMemoryProject,
    included: dict[str, InMemoryProject],
) -> Dependency:
    where = f"{configuration.owner.path} {configuration.name}"

    if isinstance(item, str):
        try:
            return parse_dependency_notation(item)
        except ValueError as e:
            raise BuildDescriptionError(f"{where}: {e}") from e

    if isinstance(item, dict) and "project" in item:
        build_name = item.get("build")
        if build_name is None:
            target_build = build_root
        elif build_name in included:
            target_build = included[build_name]
        else:
            raise BuildDescriptionError(f"{where}: unknown included build {build_name!r}")

        try:
            target = target_build.find_project(str(item["project"]))
        except (KeyError, ValueError) as e:
            raise BuildDescriptionError(f"{where}: {e}") from e
        return ProjectDependency(target)

    raise BuildDescriptionError(f"{where}: unsupported dependency entry {item!r}")
