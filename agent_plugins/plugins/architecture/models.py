"""Data models for the architecture plugin.

The graph is kept as plain dataclasses: systems and people keyed by their
caller-supplied key, relationships as an ordered list of directed edges.
The dict form of each model is exactly what is persisted to disk.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


class GraphFormatError(ValueError):
    """Raised when persisted architecture data does not have the expected shape."""


def _require_str(data: Dict[str, Any], name: str, where: str) -> str:
    value = data.get(name)
    if not isinstance(value, str):
        raise GraphFormatError(f"{where}: '{name}' must be a string")
    return value


def _optional_str(data: Dict[str, Any], name: str, where: str) -> str:
    value = data.get(name, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise GraphFormatError(f"{where}: '{name}' must be a string")
    return value


@dataclass
class System:
    """A software system, service, database or external platform."""

    key: str
    label: str
    description: str
    external: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization (the key is the map key)."""
        return {
            "label": self.label,
            "description": self.description,
            "external": self.external,
        }

    @classmethod
    def from_dict(cls, key: str, data: Dict[str, Any]) -> 'System':
        """Create from dictionary."""
        where = f"systems[{key!r}]"
        if not isinstance(data, dict):
            raise GraphFormatError(f"{where}: must be an object")
        return cls(
            key=key,
            label=_require_str(data, "label", where),
            description=_optional_str(data, "description", where),
            external=bool(data.get("external", False)),
        )


@dataclass
class Person:
    """An actor or role in the system context."""

    key: str
    label: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization (the key is the map key)."""
        return {
            "label": self.label,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, key: str, data: Dict[str, Any]) -> 'Person':
        """Create from dictionary."""
        where = f"people[{key!r}]"
        if not isinstance(data, dict):
            raise GraphFormatError(f"{where}: must be an object")
        return cls(
            key=key,
            label=_require_str(data, "label", where),
            description=_optional_str(data, "description", where),
        )


@dataclass
class Relationship:
    """A directed, labeled edge between two element keys.

    The endpoints are not checked against the known systems and people.
    """

    source: str
    target: str
    label: str

    @property
    def pair(self) -> Tuple[str, str]:
        """The (from, to) identity of this edge."""
        return (self.source, self.target)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "from": self.source,
            "to": self.target,
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: int = 0) -> 'Relationship':
        """Create from dictionary."""
        where = f"relationships[{index}]"
        if not isinstance(data, dict):
            raise GraphFormatError(f"{where}: must be an object")
        return cls(
            source=_require_str(data, "from", where),
            target=_require_str(data, "to", where),
            label=_require_str(data, "label", where),
        )


@dataclass
class ArchitectureGraph:
    """Systems, people and relationships that make up the architecture memory."""

    systems: Dict[str, System] = field(default_factory=dict)
    people: Dict[str, Person] = field(default_factory=dict)
    relationships: List[Relationship] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.systems and not self.people and not self.relationships

    def copy(self) -> 'ArchitectureGraph':
        """Return a deep copy sharing no mutable state with this graph."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted JSON document."""
        return {
            "systems": {k: s.to_dict() for k, s in self.systems.items()},
            "people": {k: p.to_dict() for k, p in self.people.items()},
            "relationships": [r.to_dict() for r in self.relationships],
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'ArchitectureGraph':
        """Create from the persisted JSON document.

        Missing collections default to empty.

        Raises:
            GraphFormatError: If the document does not have the expected shape.
        """
        if not isinstance(data, dict):
            raise GraphFormatError("architecture data must be an object")

        systems = data.get("systems", {})
        people = data.get("people", {})
        relationships = data.get("relationships", [])
        if not isinstance(systems, dict):
            raise GraphFormatError("'systems' must be an object")
        if not isinstance(people, dict):
            raise GraphFormatError("'people' must be an object")
        if not isinstance(relationships, list):
            raise GraphFormatError("'relationships' must be an array")

        return cls(
            systems={k: System.from_dict(k, v) for k, v in systems.items()},
            people={k: Person.from_dict(k, v) for k, v in people.items()},
            relationships=[
                Relationship.from_dict(r, i) for i, r in enumerate(relationships)
            ],
        )
