"""Per-run deployment context shared between deploy stages.

The context lives for one deploy invocation. The upload stage reads the
packaged sources from it and records where gen-2 archives were stored.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from cfdeploy.models.backend import Backend
from cfdeploy.models.upload import StorageSource


class RegionStorageMap:
    """Region to StorageSource mapping safe to fill from concurrent tasks.

    Each upload task writes its own region key; writes still go through a
    lock so the map never observes interleaved mutation.
    """

    def __init__(self) -> None:
        """Create an empty map."""
        self._entries: dict[str, StorageSource] = {}
        self._lock = asyncio.Lock()

    async def set(self, region: str, storage: StorageSource) -> None:
        """Record the storage descriptor for a region."""
        async with self._lock:
            self._entries[region] = storage

    def get(self, region: str) -> StorageSource | None:
        """Return the storage descriptor for a region, if recorded."""
        return self._entries.get(region)

    def regions(self) -> list[str]:
        """Return recorded regions in sorted order."""
        return sorted(self._entries)

    def as_dict(self) -> dict[str, StorageSource]:
        """Return a snapshot copy of the map."""
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, region: object) -> bool:
        return region in self._entries


@dataclass
class CodebaseSource:
    """Packaged archives for one codebase.

    Attributes:
        functions_source_v1: Archive for gen-1 endpoints, if any were packaged.
        functions_source_v2: Archive for gen-2 endpoints, if any were packaged.
        storage: Where each region's gen-2 archive was uploaded.
    """

    functions_source_v1: Path | None = None
    functions_source_v2: Path | None = None
    storage: RegionStorageMap = field(default_factory=RegionStorageMap)

    @property
    def has_sources(self) -> bool:
        return bool(self.functions_source_v1 or self.functions_source_v2)


@dataclass
class CodebaseConfig:
    """The codebase being deployed and the folder its source came from."""

    codebase: str
    source: str


@dataclass
class DeployContext:
    """Transient state for one deploy invocation.

    Attributes:
        project_id: Project being deployed to.
        config: Codebase this invocation deploys. None means nothing to do.
        sources: Packaged sources keyed by codebase name.
    """

    project_id: str
    config: CodebaseConfig | None = None
    sources: dict[str, CodebaseSource] = field(default_factory=dict)

    def source_for(self, codebase: str) -> CodebaseSource | None:
        return self.sources.get(codebase)


@dataclass
class DeployPayload:
    """Planning output handed to the deploy stage."""

    want_backend: Backend
