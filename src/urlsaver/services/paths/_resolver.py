"""
Base directory resolution and write authorization.

The base directory comes from an ordered chain of strategies; the first one
returning a directory wins. Authorization is a string-prefix containment
check against that directory, bypassed by the any-path override or by a
recognized unrestricted context.
"""

from __future__ import annotations

import json
import os
import tempfile
from typing import Callable

from urlsaver.logging import get_logger
from urlsaver.services.paths._config import (
    CONFIG_BASE_DIR_KEY,
    CWD_CONFIG_FILES,
    HOME_CONFIG_FILE,
    UNRESTRICTED_CONTEXT_SIGNATURES,
    WORKSPACE_ENV_VARS,
)
from urlsaver.services.paths._environment import EnvironmentContext
from urlsaver.services.paths._models import ResolvedDestination

logger = get_logger(__name__)

BaseDirectoryStrategy = Callable[[EnvironmentContext], "str | None"]


def _existing_dir(path: str | None) -> str | None:
    if path and os.path.isdir(path):
        return path
    return None


# =============================================================================
# Strategies
# =============================================================================


def from_override(ctx: EnvironmentContext) -> str | None:
    """MCP_BASE_DIR, when it names an existing directory."""
    value = ctx.base_dir_override
    if value is None:
        return None
    return _existing_dir(ctx.absolute(value))


def config_file_candidates(ctx: EnvironmentContext) -> list[str]:
    """Config file locations in lookup order."""
    candidates = []
    if ctx.cwd:
        candidates.extend(os.path.join(ctx.cwd, name) for name in CWD_CONFIG_FILES)
    if ctx.home:
        candidates.append(os.path.join(ctx.home, HOME_CONFIG_FILE))
    return candidates


def _read_config_base_dir(config_path: str) -> str | None:
    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        logger.debug(f"Ignoring unreadable config file {config_path}: {e}")
        return None

    if not isinstance(data, dict):
        return None
    value = data.get(CONFIG_BASE_DIR_KEY)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def from_config_file(ctx: EnvironmentContext) -> str | None:
    """baseDir from the first config file that parses and names an existing directory."""
    for config_path in config_file_candidates(ctx):
        value = _read_config_base_dir(config_path)
        if value is None:
            continue
        directory = _existing_dir(
            ctx.absolute(value, relative_to=os.path.dirname(config_path))
        )
        if directory:
            return directory
        logger.debug(f"Config file {config_path} names missing directory {value}")
    return None


def from_workspace_env(ctx: EnvironmentContext) -> str | None:
    """First workspace variable naming an existing directory."""
    for name in WORKSPACE_ENV_VARS:
        value = ctx.get(name)
        if value is None:
            continue
        directory = _existing_dir(ctx.absolute(value))
        if directory:
            return directory
    return None


def from_working_directory(ctx: EnvironmentContext) -> str | None:
    """The context's working directory, if it is still a directory."""
    return _existing_dir(ctx.cwd)


def from_home(ctx: EnvironmentContext) -> str | None:
    """Home directory, falling back to the temp directory."""
    return _existing_dir(ctx.home) or tempfile.gettempdir()


DEFAULT_STRATEGIES: tuple[tuple[str, BaseDirectoryStrategy], ...] = (
    ("override", from_override),
    ("config-file", from_config_file),
    ("workspace-env", from_workspace_env),
    ("working-directory", from_working_directory),
    ("home", from_home),
)


# =============================================================================
# Public API
# =============================================================================


def resolve_base_directory_with_source(
    ctx: EnvironmentContext | None = None,
    strategies: tuple[tuple[str, BaseDirectoryStrategy], ...] = DEFAULT_STRATEGIES,
) -> tuple[str, str]:
    """
    Resolve the base directory and name the strategy that produced it.

    Never raises: a strategy that errors is skipped.

    Returns:
        (absolute directory, strategy name)
    """
    ctx = ctx or EnvironmentContext.from_process()
    for name, strategy in strategies:
        try:
            directory = strategy(ctx)
        except Exception as e:
            logger.warning(f"Base directory strategy {name} failed: {e}")
            continue
        if directory:
            return os.path.abspath(directory), name
    return os.path.abspath(tempfile.gettempdir()), "temp"


def resolve_base_directory(ctx: EnvironmentContext | None = None) -> str:
    """Resolve the directory relative paths are anchored to."""
    directory, _ = resolve_base_directory_with_source(ctx)
    return directory


def normalize_path(raw_path: str) -> str:
    """Normalize separators and dot segments. Backslashes count as separators."""
    if os.sep == "/":
        raw_path = raw_path.replace("\\", "/")
    return os.path.normpath(raw_path)


def resolve_path(raw_path: str, base_directory: str) -> str:
    """Absolute form of raw_path; relative paths are anchored at base_directory."""
    normalized = normalize_path(raw_path)
    if os.path.isabs(normalized):
        return os.path.abspath(normalized)
    return os.path.abspath(os.path.join(base_directory, normalized))


def is_unrestricted_context(base_directory: str) -> bool:
    """True when the base directory sits inside a known unrestricted install location."""
    haystack = base_directory.replace("\\", "/").lower()
    return any(sig.lower() in haystack for sig in UNRESTRICTED_CONTEXT_SIGNATURES)


def is_path_permitted(
    raw_path: str,
    base_directory: str,
    ctx: EnvironmentContext | None = None,
) -> bool:
    """
    Decide whether raw_path may be written.

    Containment compares path strings only; symlinks are not resolved.
    Fails closed on any error.
    """
    ctx = ctx or EnvironmentContext.from_process()
    try:
        if ctx.allow_any_path:
            return True
        if is_unrestricted_context(base_directory):
            return True

        resolved = resolve_path(raw_path, base_directory)
        base = os.path.abspath(base_directory)
        if resolved == base:
            return True
        prefix = base if base.endswith(os.sep) else base + os.sep
        return resolved.startswith(prefix)
    except Exception as e:
        logger.warning(f"Path check failed for {raw_path!r}: {e}")
        return False


def resolve_destination(
    raw_path: str,
    ctx: EnvironmentContext | None = None,
) -> ResolvedDestination:
    """Resolve base directory, absolute destination and permission in one go."""
    ctx = ctx or EnvironmentContext.from_process()
    base_directory, source = resolve_base_directory_with_source(ctx)
    permitted = is_path_permitted(raw_path, base_directory, ctx)
    try:
        absolute_path = resolve_path(raw_path, base_directory)
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not resolve {raw_path!r}: {e}")
        absolute_path = ""
        permitted = False
    return ResolvedDestination(
        base_directory=base_directory,
        absolute_path=absolute_path,
        permitted=permitted,
        base_directory_source=source,
    )
