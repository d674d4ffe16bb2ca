"""Data models for dependency extraction."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Union

from packageurl import PackageURL

if TYPE_CHECKING:
    from .protocol import Project

TRANSITIVE_TAG = "transitive"
MAVEN_TARGET_PREFIX = "@maven://"
UNDEFINED_GROUP = "undefined"


@dataclass(frozen=True)
class SquareDependency:
    """Canonical, tool-independent form of a single dependency edge.

    Attributes:
        target: ``@maven://group:name`` for external modules, a
            slash-delimited project key (e.g. ``/app/lib``) for projects
        tags: Semantic markers. ``transitive`` marks project references
            whose own dependencies are pulled in along with them.
    """

    target: str
    tags: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.target:
            raise ValueError("SquareDependency target must not be empty")
        # Accept any iterable of tags but always store an immutable set
        object.__setattr__(self, "tags", frozenset(self.tags))

    @classmethod
    def external(cls, group: str | None, name: str) -> "SquareDependency":
        """Create the record for an external module coordinate."""
        return cls(target=f"{MAVEN_TARGET_PREFIX}{group or UNDEFINED_GROUP}:{name}")

    @property
    def is_transitive(self) -> bool:
        return TRANSITIVE_TAG in self.tags

    @property
    def is_external(self) -> bool:
        return self.target.startswith(MAVEN_TARGET_PREFIX)

    def to_purl(self) -> PackageURL | None:
        """Return the Package URL of an external module record.

        Returns:
            ``pkg:maven/group/name`` for external modules (without a
            namespace when the group is undefined), None for projects.
        """
        if not self.is_external:
            return None
        group, _, name = self.target[len(MAVEN_TARGET_PREFIX) :].rpartition(":")
        namespace = None if group in ("", UNDEFINED_GROUP) else group
        return PackageURL(type="maven", namespace=namespace, name=name)

    def __str__(self) -> str:
        if not self.tags:
            return self.target
        return f"{self.target} [{', '.join(sorted(self.tags))}]"


@dataclass(frozen=True)
class ExternalModuleDependency:
    """A declared dependency on a module published to a repository.

    Attributes:
        name: Artifact name (``foo`` in ``com.squareup:foo:1.0``)
        group: Group coordinate, None when declared without one (``:foo``)
        version: Requested version, None when left to the host
    """

    name: str
    group: str | None = None
    version: str | None = None

    @property
    def notation(self) -> str:
        parts = [self.group or "", self.name]
        if self.version:
            parts.append(self.version)
        return ":".join(parts)


@dataclass(frozen=True)
class ProjectDependency:
    """A declared dependency on another project of the build."""

    dependency_project: "Project"


Dependency = Union[ExternalModuleDependency, ProjectDependency]

# Kinds accepted by the classifier; hosts validate against this at registration
DEPENDENCY_TYPES = (ExternalModuleDependency, ProjectDependency)


@dataclass(frozen=True)
class ModuleComponentIdentifier:
    """Identity of a resolved component that came from a repository."""

    group: str | None
    module: str
    version: str | None = None


@dataclass(frozen=True)
class ProjectComponentIdentifier:
    """Identity of a resolved component produced by a project.

    ``identity_path`` is unique across the whole build tree: projects of an
    included build are prefixed with the included build's name, e.g.
    ``:includeBuild:project:path``.
    """

    identity_path: str


ComponentIdentifier = Union[ModuleComponentIdentifier, ProjectComponentIdentifier]


@dataclass(frozen=True)
class ResolvedArtifact:
    """A file produced by resolving a configuration.

    One component may contribute several artifacts (e.g. the main jar and a
    ``sources`` classifier jar).
    """

    component_identifier: ComponentIdentifier
    name: str = ""
    extension: str = "jar"
    classifier: str | None = None


@dataclass(frozen=True)
class NotResolvable:
    """Resolution outcome of a configuration that must not be resolved."""


@dataclass(frozen=True)
class Resolved:
    """Resolution outcome carrying the resolved artifacts."""

    artifacts: frozenset[ResolvedArtifact] = field(default_factory=frozenset)

    @classmethod
    def of(cls, artifacts: Iterable[ResolvedArtifact]) -> "Resolved":
        return cls(artifacts=frozenset(artifacts))


NOT_RESOLVABLE = NotResolvable()

Resolution = Union[NotResolvable, Resolved]
