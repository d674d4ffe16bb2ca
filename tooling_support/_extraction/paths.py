"""Conversion between colon-delimited build paths and slash-delimited keys.

Build paths identify projects inside a build tree: ``:`` is the root
project, ``:app`` a direct child, ``:includeBuild:project:path`` a project
of an included build. Keys are the canonical form used as
``SquareDependency`` targets: ``/``, ``/app``, ``/includeBuild/project/path``.
"""

from ..exceptions import InvalidBuildPathError

PATH_SEPARATOR = ":"
KEY_SEPARATOR = "/"
ROOT_PATH = PATH_SEPARATOR
ROOT_KEY = KEY_SEPARATOR


def is_absolute_path(path: str) -> bool:
    """Check if a build path starts at the root of its build."""
    return path.startswith(PATH_SEPARATOR)


def path_segments(path: str) -> list[str]:
    """Split a build path into its project names.

    Args:
        path: Absolute (``:a:b``) or relative (``a:b``) build path

    Returns:
        Project names from outermost to innermost. Empty for the root path.

    Raises:
        InvalidBuildPathError: If the path is empty or has an empty segment.
    """
    if not path:
        raise InvalidBuildPathError("Build path must not be empty")
    if path == ROOT_PATH:
        return []

    body = path[1:] if is_absolute_path(path) else path
    segments = body.split(PATH_SEPARATOR)
    if any(not segment for segment in segments):
        raise InvalidBuildPathError(f"Build path has an empty segment: {path!r}")
    return segments


def resolve_path(path: str, relative_to: str) -> str:
    """Resolve a build path against the path of another project.

    Absolute paths are returned unchanged (after validation); relative
    paths are appended to ``relative_to``.

    Examples:
        >>> resolve_path(":lib", ":app")
        ':lib'
        >>> resolve_path("feature", ":app")
        ':app:feature'
    """
    segments = path_segments(path)
    if is_absolute_path(path):
        return _join(segments)
    return _join(path_segments(relative_to) + segments)


def path_to_key(path: str) -> str:
    """Convert a build path to its slash-delimited key.

    The root path maps to the root key ``/``.
    """
    return ROOT_KEY + KEY_SEPARATOR.join(path_segments(path))


def key_to_path(key: str) -> str:
    """Convert a slash-delimited key back to an absolute build path."""
    if not key.startswith(KEY_SEPARATOR):
        raise InvalidBuildPathError(f"Key must start with {KEY_SEPARATOR!r}: {key!r}")
    if key == ROOT_KEY:
        return ROOT_PATH
    segments = key[1:].split(KEY_SEPARATOR)
    if any(not segment for segment in segments):
        raise InvalidBuildPathError(f"Key has an empty segment: {key!r}")
    return _join(segments)


def _join(segments: list[str]) -> str:
    return PATH_SEPARATOR + PATH_SEPARATOR.join(segments)
