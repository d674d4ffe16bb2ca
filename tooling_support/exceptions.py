"""Custom exceptions for tooling-support."""


class ToolingSupportError(Exception):
    """Base exception for all tooling-support operations."""


class ConfigurationError(ToolingSupportError):
    """Raised when configuration validation fails."""


class UnsupportedDependencyError(ToolingSupportError, TypeError):
    """Raised when a dependency declaration is not one of the supported kinds."""


class InvalidBuildPathError(ToolingSupportError, ValueError):
    """Raised when a colon-delimited build path is malformed."""


class ResolutionError(ToolingSupportError):
    """Raised by a host build when resolving a configuration fails."""


class IllegalResolutionError(ResolutionError):
    """Raised when a host is asked to resolve a non-resolvable configuration."""


class BuildDescriptionError(ToolingSupportError):
    """Raised when a build description file cannot be loaded."""
