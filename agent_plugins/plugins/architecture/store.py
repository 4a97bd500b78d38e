"""In-memory architecture store backed by ArchitectureStorage."""

import logging
from pathlib import Path
from typing import Optional, Union

from .models import ArchitectureGraph, Person, Relationship, System
from .storage import ArchitectureStorage, StorageStatus

logger = logging.getLogger(__name__)

# Returned by get_summary_text() when nothing has been recorded.
EMPTY_SUMMARY = None


class ArchitectureStore:
    """Systems, people and relationships remembered across conversations.

    The graph is read from storage the first time the store is used and then
    kept in memory as the source of truth. Every mutation writes the whole
    graph back before returning. Storage failures never propagate: mutators
    return the StorageStatus of the write and the in-memory graph stays
    correct even when the disk copy goes stale.

    Readers get copies, so callers cannot change the store through them.
    """

    def __init__(self, path: Union[str, Path]):
        """Create a store for the given storage location.

        Args:
            path: Path to the JSON document holding the graph.
        """
        self._storage = ArchitectureStorage(path)
        self._graph: Optional[ArchitectureGraph] = None
        self._last_load_status: Optional[StorageStatus] = None
        self._last_save_status: Optional[StorageStatus] = None

    @property
    def path(self) -> Path:
        return self._storage.path

    @property
    def last_load_status(self) -> Optional[StorageStatus]:
        """Outcome of the most recent load, or None before first use."""
        return self._last_load_status

    @property
    def last_save_status(self) -> Optional[StorageStatus]:
        """Outcome of the most recent save, or None if nothing was saved yet."""
        return self._last_save_status

    def _ensure_loaded(self) -> ArchitectureGraph:
        if self._graph is None:
            result = self._storage.load()
            self._graph = result.graph
            self._last_load_status = result.status
            logger.debug(
                "Loaded architecture memory from %s: %d systems, %d people, %d relationships",
                self.path, len(self._graph.systems), len(self._graph.people),
                len(self._graph.relationships),
            )
        return self._graph

    def reload(self) -> StorageStatus:
        """Drop the in-memory graph and read it again from storage."""
        self._graph = None
        self._ensure_loaded()
        return self._last_load_status

    def _persist(self) -> StorageStatus:
        self._last_save_status = self._storage.save(self._graph)
        return self._last_save_status

    # ===== Mutators =====

    def add_system(
        self,
        key: str,
        label: str,
        description: str,
        external: bool = False
    ) -> StorageStatus:
        """Insert or fully replace the system stored under ``key``."""
        graph = self._ensure_loaded()
        graph.systems[key] = System(
            key=key,
            label=label,
            description=description,
            external=bool(external),
        )
        return self._persist()

    def add_person(self, key: str, label: str, description: str = "") -> StorageStatus:
        """Insert or fully replace the person stored under ``key``."""
        graph = self._ensure_loaded()
        graph.people[key] = Person(key=key, label=label, description=description)
        return self._persist()

    def add_relationship(self, source: str, target: str, label: str) -> StorageStatus:
        """Record a directed edge, replacing any edge with the same (source, target).

        A replaced edge moves to the end of the relationship list.
        """
        graph = self._ensure_loaded()
        pair = (source, target)
        graph.relationships = [r for r in graph.relationships if r.pair != pair]
        graph.relationships.append(Relationship(source=source, target=target, label=label))
        return self._persist()

    # ===== Readers =====

    def get_snapshot(self) -> ArchitectureGraph:
        """Return an independent deep copy of the whole graph."""
        return self._ensure_loaded().copy()

    def get_summary_text(self) -> Optional[str]:
        """Return a one-line-per-section digest for prompt injection.

        Sections appear in the order Systems, People, Relationships; empty
        sections are left out.

        Returns:
            The digest, or EMPTY_SUMMARY (None) when nothing is stored.
        """
        graph = self._ensure_loaded()
        if graph.is_empty():
            return EMPTY_SUMMARY

        lines = []
        if graph.systems:
            entries = " | ".join(
                f"{s.label} ({'external' if s.external else 'internal'}) — {s.description}"
                for s in graph.systems.values()
            )
            lines.append(f"Systems: {entries}")

        if graph.people:
            entries = " | ".join(
                f"{p.label} — {p.description}" if p.description else p.label
                for p in graph.people.values()
            )
            lines.append(f"People: {entries}")

        if graph.relationships:
            entries = " | ".join(
                f'{r.source} → {r.target} "{r.label}"'
                for r in graph.relationships
            )
            lines.append(f"Relationships: {entries}")

        return "\n".join(lines)
