"""
Path resolution for URL Content Saver.

Decides where a caller-supplied path lands and whether it may be written:
- Base directory from override, config file, workspace variables, cwd or home
- String-prefix containment check against the base directory
- MCP_ALLOW_ANY_PATH and unrestricted contexts bypass the check
"""

from urlsaver.services.paths._environment import EnvironmentContext
from urlsaver.services.paths._models import ResolvedDestination
from urlsaver.services.paths._resolver import (
    DEFAULT_STRATEGIES,
    is_path_permitted,
    is_unrestricted_context,
    normalize_path,
    resolve_base_directory,
    resolve_base_directory_with_source,
    resolve_destination,
    resolve_path,
)

__all__ = [
    "DEFAULT_STRATEGIES",
    "EnvironmentContext",
    "ResolvedDestination",
    "is_path_permitted",
    "is_unrestricted_context",
    "normalize_path",
    "resolve_base_directory",
    "resolve_base_directory_with_source",
    "resolve_destination",
    "resolve_path",
]
