"""
Models for path resolution.
"""

from __future__ import annotations

from pydantic import BaseModel


class ResolvedDestination(BaseModel):
    """Where a caller-supplied path lands and whether writing there is allowed."""

    model_config = {"frozen": True}

    base_directory: str
    absolute_path: str
    permitted: bool
    base_directory_source: str = ""
