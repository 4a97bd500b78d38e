"""Architecture memory plugin.

This plugin lets the model:
- Remember systems, people and the relationships between them
- Keep that architecture across conversations (JSON file on disk)
- Render it as a C4 Context diagram in PlantUML, Mermaid or LikeC4

Usage:
    plugin = create_plugin()
    plugin.initialize({"storage_path": "data/architecture.json"})

Set ARCHITECTURE_PATH to move the storage file without touching config.
"""

# Plugin kind identifier for registry discovery
PLUGIN_KIND = "tool"

from .models import ArchitectureGraph, GraphFormatError, Person, Relationship, System
from .plugin import ArchitecturePlugin, create_plugin
from .renderers import (
    DiagramFormat,
    render_diagram,
    render_likec4,
    render_mermaid,
    render_plantuml,
)
from .storage import ArchitectureStorage, StorageErrorKind, StorageStatus
from .store import ArchitectureStore

__all__ = [
    "PLUGIN_KIND",
    "ArchitecturePlugin",
    "create_plugin",
    "ArchitectureStore",
    "ArchitectureStorage",
    "StorageStatus",
    "StorageErrorKind",
    "ArchitectureGraph",
    "GraphFormatError",
    "System",
    "Person",
    "Relationship",
    "DiagramFormat",
    "render_diagram",
    "render_plantuml",
    "render_mermaid",
    "render_likec4",
]
