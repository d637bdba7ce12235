"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``orgmap.toml`` only carries
overrides. A fresh workspace needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from orgmap.domain.types import OWNEDBY


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    # Relative paths resolve against the workspace root
    path: Path = Path(".orgmap") / "orgmap.db"
    dataset: str = "default"


class HierarchyConfig(BaseModel):
    """[hierarchy] section."""

    model_config = {"frozen": True}

    containment_labels: list[str] = Field(default_factory=lambda: [OWNEDBY])
    promote_orphan_subgroups: bool = True


class OrgmapConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    store: StoreConfig = Field(default_factory=StoreConfig)
    hierarchy: HierarchyConfig = Field(default_factory=HierarchyConfig)
