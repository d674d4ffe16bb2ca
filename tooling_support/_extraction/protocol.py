"""Protocol definitions for the host build objects read by the extractors."""

from typing import Iterable, Protocol

from .models import Dependency, ResolvedArtifact


class Project(Protocol):
    """A project (build unit) of the host build.

    Example:
        class GradleProject:
            name = "app"
            path = ":app"
    """

    @property
    def name(self) -> str:
        """Simple name of the project."""
        ...

    @property
    def path(self) -> str:
        """Colon-delimited path of the project within its own build.

        The root project of a build has the path ``:``.
        """
        ...


class Configuration(Protocol):
    """A named bucket of dependency declarations owned by a project.

    Example:
        class GradleConfiguration:
            name = "implementation"
            can_be_resolved = False

            @property
            def dependencies(self) -> list[Dependency]:
                ...

            def resolve(self) -> list[ResolvedArtifact]:
                ...
    """

    @property
    def name(self) -> str:
        """Configuration name, e.g. ``implementation``."""
        ...

    @property
    def can_be_resolved(self) -> bool:
        """Whether resolve() may be called.

        Configurations that only collect declarations for other
        configurations are not resolvable. Resolving them can trigger
        unwanted or cyclic resolution in the host.
        """
        ...

    @property
    def dependencies(self) -> Iterable[Dependency]:
        """Declared dependencies in declaration order. Never triggers resolution."""
        ...

    def resolve(self) -> Iterable[ResolvedArtifact]:
        """Resolve the configuration and return its artifacts.

        Only valid when can_be_resolved is True. Host failures propagate.
        """
        ...
