"""In-memory build tree implementing the extraction protocols."""

from ..exceptions import (
    IllegalResolutionError,
    InvalidBuildPathError,
    ResolutionError,
    UnsupportedDependencyError,
)
from ..logging_config import logger
from .._extraction.models import (
    DEPENDENCY_TYPES,
    Dependency,
    ExternalModuleDependency,
    ModuleComponentIdentifier,
    ProjectComponentIdentifier,
    ProjectDependency,
    ResolvedArtifact,
)
from .._extraction.paths import KEY_SEPARATOR, PATH_SEPARATOR, ROOT_PATH, path_segments, resolve_path


class InMemoryProject:
    """A project in an in-memory build tree.

    Root projects have no parent. A root project created with a
    ``build_name`` is the root of an included build: its projects keep
    build-relative paths but get identity paths prefixed with the build name.
    Setting ``produces_artifacts`` to False models a project without outputs:
    configurations depending on it resolve no artifact for it.

    Example:
        root = InMemoryProject("root")
        app = root.child("app")
        app.path             # ':app'

        included = InMemoryProject("includeBuild", build_name="includeBuild")
        lib = included.child("lib")
        lib.path             # ':lib'
        lib.identity_path    # ':includeBuild:lib'
    """

    def __init__(self, name: str, parent: "InMemoryProject | None" = None, build_name: str | None = None) -> None:
        if not name or PATH_SEPARATOR in name or KEY_SEPARATOR in name:
            raise InvalidBuildPathError(f"Invalid project name: {name!r}")
        if parent is not None and build_name is not None:
            raise ValueError("Only root projects can name an included build")

        self.name = name
        self.parent = parent
        self._build_name = build_name
        self.produces_artifacts = True
        self._children: dict[str, InMemoryProject] = {}
        self._configurations: dict[str, InMemoryConfiguration] = {}

    @property
    def root_project(self) -> "InMemoryProject":
        project = self
        while project.parent is not None:
            project = project.parent
        return project

    @property
    def build_name(self) -> str | None:
        """Name of the included build this project belongs to, None for the primary build."""
        return self.root_project._build_name

    @property
    def path(self) -> str:
        if self.parent is None:
            return ROOT_PATH
        parent_path = self.parent.path
        if parent_path == ROOT_PATH:
            return f"{PATH_SEPARATOR}{self.name}"
        return f"{parent_path}{PATH_SEPARATOR}{self.name}"

    @property
    def identity_path(self) -> str:
        """Path of the project that is unique across the primary and included builds."""
        build_name = self.build_name
        if build_name is None:
            return self.path
        if self.path == ROOT_PATH:
            return f"{PATH_SEPARATOR}{build_name}"
        return f"{PATH_SEPARATOR}{build_name}{self.path}"

    @property
    def children(self) -> list["InMemoryProject"]:
        return list(self._children.values())

    @property
    def configurations(self) -> list["InMemoryConfiguration"]:
        return list(self._configurations.values())

    def child(self, name: str) -> "InMemoryProject":
        """Return the child project with this name, creating it if needed."""
        if name not in self._children:
            self._children[name] = InMemoryProject(name, parent=self)
        return self._children[name]

    def all_projects(self) -> list["InMemoryProject"]:
        """Return this project and all its descendants, depth first."""
        projects = [self]
        for child in self._children.values():
            projects.extend(child.all_projects())
        return projects

    def find_project(self, path: str) -> "InMemoryProject":
        """Look up a project of this build by absolute or relative path.

        Raises:
            KeyError: If no such project exists.
        """
        project = self.root_project
        for segment in path_segments(resolve_path(path, self.path)):
            try:
                project = project._children[segment]
            except KeyError:
                raise KeyError(f"Project {path!r} not found in build of {project.root_project.name}") from None
        return project

    def create_configuration(self, name: str, can_be_resolved: bool = True) -> "InMemoryConfiguration":
        if name in self._configurations:
            raise ValueError(f"Configuration {name!r} already exists in {self.path}")
        configuration = InMemoryConfiguration(name, owner=self, can_be_resolved=can_be_resolved)
        self._configurations[name] = configuration
        return configuration

    def get_configuration(self, name: str) -> "InMemoryConfiguration":
        try:
            return self._configurations[name]
        except KeyError:
            raise KeyError(f"Configuration {name!r} not found in {self.path}") from None

    def __repr__(self) -> str:
        return f"InMemoryProject({self.identity_path!r})"


class InMemoryConfiguration:
    """A dependency bucket of an InMemoryProject.

    ``resolve()`` derives one artifact per declared dependency: project
    dependencies produce project identities unless the project produces no
    artifacts, external modules produce module identities and must carry a
    version. Extra artifacts (e.g. substituted
    projects of included builds) can be registered with ``add_artifact``.
    ``resolve_count`` records how often resolution was triggered.
    """

    def __init__(self, name: str, owner: InMemoryProject, can_be_resolved: bool = True) -> None:
        self.name = name
        self.owner = owner
        self.can_be_resolved = can_be_resolved
        self.resolve_count = 0
        self._dependencies: list[Dependency] = []
        self._artifacts: list[ResolvedArtifact] = []

    @property
    def dependencies(self) -> list[Dependency]:
        return list(self._dependencies)

    def add_dependency(self, dependency: Dependency) -> None:
        """Declare a dependency.

        Raises:
            UnsupportedDependencyError: If the object is not a supported dependency kind.
        """
        if not isinstance(dependency, DEPENDENCY_TYPES):
            raise UnsupportedDependencyError(
                f"Unsupported dependency type {type(dependency).__name__} for {self.owner.path} {self.name}"
            )
        self._dependencies.append(dependency)

    def add_artifact(self, artifact: ResolvedArtifact) -> None:
        self._artifacts.append(artifact)

    def resolve(self) -> list[ResolvedArtifact]:
        if not self.can_be_resolved:
            raise IllegalResolutionError(f"Resolving configuration {self.name} of {self.owner.path} is not allowed")

        self.resolve_count += 1
        logger.debug(f"Resolving {self.owner.identity_path} configuration {self.name}")

        artifacts: list[ResolvedArtifact] = []
        for dependency in self._dependencies:
            if isinstance(dependency, ProjectDependency):
                target = dependency.dependency_project
                if not getattr(target, "produces_artifacts", True):
                    continue
                identity_path = getattr(target, "identity_path", target.path)
                artifacts.append(
                    ResolvedArtifact(ProjectComponentIdentifier(identity_path=identity_path), name=target.name)
                )
            else:
                artifacts.append(self._resolve_module(dependency))

        artifacts.extend(self._artifacts)
        return artifacts

    def _resolve_module(self, dependency: ExternalModuleDependency) -> ResolvedArtifact:
        if not dependency.version:
            raise ResolutionError(
                f"Could not resolve {dependency.notation} for {self.owner.path} {self.name}: no version given"
            )
        identifier = ModuleComponentIdentifier(
            group=dependency.group,
            module=dependency.name,
            version=dependency.version,
        )
        return ResolvedArtifact(identifier, name=f"{dependency.name}-{dependency.version}")

    def __repr__(self) -> str:
        return f"InMemoryConfiguration({self.owner.path!r}, {self.name!r})"


def parse_dependency_notation(notation: str) -> ExternalModuleDependency:
    """Parse Gradle string notation ``group:name[:version]``.

    An empty group (``:foo``) means the dependency has no group.

    Raises:
        ValueError: If the notation does not have two or three parts.
    """
    parts = notation.strip().split(":")
    if len(parts) not in (2, 3) or not parts[1]:
        raise ValueError(f"Invalid dependency notation {notation!r}, expected 'group:name[:version]'")

    group = parts[0] or None
    version = parts[2] if len(parts) == 3 and parts[2] else None
    return ExternalModuleDependency(name=parts[1], group=group, version=version)
