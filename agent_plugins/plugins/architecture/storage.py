"""Storage backend for the architecture plugin.

The whole graph lives in one JSON document. Reads and writes never raise:
every outcome is reported as a StorageStatus so callers can keep working
from memory when the disk misbehaves.
"""

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .models import ArchitectureGraph, GraphFormatError

logger = logging.getLogger(__name__)


class StorageErrorKind(Enum):
    """Why a load or save did not succeed."""
    MISSING = "missing"
    UNREADABLE = "unreadable"
    MALFORMED = "malformed"
    WRITE_FAILED = "write_failed"


@dataclass
class StorageStatus:
    """Outcome of a storage operation.

    Attributes:
        ok: True when the operation did what was asked.
        error_kind: Failure category when ok is False.
        message: Human-readable detail for logs and tests.
    """
    ok: bool
    error_kind: Optional[StorageErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def success(cls) -> 'StorageStatus':
        return cls(ok=True)

    @classmethod
    def failure(cls, kind: StorageErrorKind, message: str) -> 'StorageStatus':
        return cls(ok=False, error_kind=kind, message=message)


@dataclass
class LoadResult:
    """Graph read from disk plus how the read went.

    The graph is always usable: it is empty whenever status.ok is False.
    """
    graph: ArchitectureGraph
    status: StorageStatus


class ArchitectureStorage:
    """JSON file storage for the architecture graph.

    Writes go to a sibling ``.tmp`` file that then replaces the target, so
    the file on disk holds either the previous or the new document.
    """

    def __init__(self, path: Union[str, Path]):
        """Initialize storage with file path.

        Args:
            path: Path to the JSON document. The parent directory is created
                on the first save, not here.
        """
        self.path = Path(path)

    @property
    def temp_path(self) -> Path:
        return self.path.with_name(self.path.name + ".tmp")

    def load(self) -> LoadResult:
        """Read the graph from disk.

        Returns:
            LoadResult whose graph is empty if the file is missing,
            unreadable or malformed.
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = f.read()
        except FileNotFoundError:
            return LoadResult(
                ArchitectureGraph(),
                StorageStatus.failure(StorageErrorKind.MISSING, f"{self.path} does not exist"),
            )
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read architecture data from %s: %s", self.path, e)
            return LoadResult(
                ArchitectureGraph(),
                StorageStatus.failure(StorageErrorKind.UNREADABLE, str(e)),
            )

        try:
            graph = ArchitectureGraph.from_dict(json.loads(raw))
        except (json.JSONDecodeError, GraphFormatError, RecursionError) as e:
            logger.warning("Ignoring malformed architecture data in %s: %s", self.path, e)
            return LoadResult(
                ArchitectureGraph(),
                StorageStatus.failure(StorageErrorKind.MALFORMED, str(e)),
            )

        return LoadResult(graph, StorageStatus.success())

    def save(self, graph: ArchitectureGraph) -> StorageStatus:
        """Persist the full graph.

        Args:
            graph: Graph to write.

        Returns:
            StorageStatus; a failed write leaves the previous file in place.
        """
        temp_path = self.temp_path
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            content = json.dumps(graph.to_dict(), indent=2, ensure_ascii=False)
            with open(temp_path, 'w', encoding='utf-8') as f:
                f.write(content)
            os.replace(temp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not save architecture data to %s: %s", self.path, e)
            try:
                temp_path.unlink()
            except OSError:
                pass
            return StorageStatus.failure(StorageErrorKind.WRITE_FAILED, str(e))

        logger.debug("Saved architecture data to %s", self.path)
        return StorageStatus.success()
