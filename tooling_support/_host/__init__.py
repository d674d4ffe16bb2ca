"""In-memory host build.

Reference implementation of the ``Project`` and ``Configuration`` protocols
used by the command line and by tests. A build tree can be assembled in code
or loaded from a YAML/JSON build description.
"""

from .loader import build_from_description, load_build_description
from .models import InMemoryConfiguration, InMemoryProject, parse_dependency_notation

__all__ = [
    "InMemoryProject",
    "InMemoryConfiguration",
    "parse_dependency_notation",
    "load_build_description",
    "build_from_description",
]
