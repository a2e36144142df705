"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Distribution(BaseModel):
    """A single resource (downloadable file or datastore table) of a dataset."""

    model_config = ConfigDict(extra="allow")

    identifier: str
    data: dict[str, Any] | None = None

    @field_validator("identifier", mode="before")
    def coerce_identifier(cls, v):
        """Metastore identifiers are opaque strings, but may arrive as numbers."""
        if isinstance(v, int | float):
            return str(v)
        return v


class DatasetRecord(BaseModel):
    """Dataset metadata as returned by the metastore with references resolved."""

    model_config = ConfigDict(extra="allow")

    identifier: str | None = None
    title: str | None = None
    distribution: list[Distribution] = Field(default_factory=list)

    @field_validator("distribution", mode="before")
    def normalize_distribution(cls, v):
        """Turn bare reference ids into minimal distribution objects."""
        if v is None:
            return []
        if isinstance(v, dict):
            v = [v]
        return [{"identifier": item} if isinstance(item, str) else item for item in v]
