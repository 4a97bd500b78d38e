"""Architecture memory plugin: remembered systems, people and C4 diagrams."""

import logging
from typing import Any, Callable, Dict, List, Optional

from google.genai import types

from ..base import UserCommand, auto_approved_tool_names
from ..model_provider.google_genai.converters import tool_schema_to_sdk
from ..model_provider.types import RiskLevel, ToolSchema
from .config_loader import ArchitectureConfig, load_config
from .renderers import DIAGRAM_FORMATS, render_diagram
from .store import ArchitectureStore

logger = logging.getLogger(__name__)

NOTED = "Noted."
NOT_INITIALIZED = "Error: architecture plugin not initialized"
NO_ARCHITECTURE = "No architecture recorded yet."


class ArchitecturePlugin:
    """Plugin that remembers a system-context architecture and draws it.

    The model records systems, people and relationships while it talks
    with the user. The graph persists across conversations and can be
    rendered as a C4 Context diagram in PlantUML, Mermaid or LikeC4.

    Every executor returns a string; nothing raised by the store or the
    renderers reaches the host.
    """

    def __init__(self):
        self._name = "architecture"
        self._config: Optional[ArchitectureConfig] = None
        self._store: Optional[ArchitectureStore] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def store(self) -> Optional[ArchitectureStore]:
        return self._store

    def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the plugin.

        Args:
            config: Optional configuration dict with keys:
                - storage_path: JSON file for the graph
                  (default: $ARCHITECTURE_PATH or data/architecture.json)
                - default_format: Diagram format used when generate_diagram
                  is called without one (default: plantuml)
                - base_path: Directory relative storage paths resolve against
        """
        config = dict(config or {})
        base_path = config.pop("base_path", None)
        self._config = load_config(config, base_path=base_path)
        self._store = ArchitectureStore(self._config.storage_path)
        logger.debug("Architecture memory at %s", self._config.storage_path)

    def shutdown(self) -> None:
        """Shutdown the plugin."""
        self._store = None
        self._config = None

    def get_tool_schemas(self) -> List[ToolSchema]:
        """Return tool declarations for the architecture memory."""
        return [
            ToolSchema(
                name='remember_system',
                description=(
                    'Store a system or service in the architecture memory. '
                    'Use for any software system, service, database, or external platform. '
                    'Persists across all conversations and interfaces.'
                ),
                parameters={
                    "type": "object",
                    "properties": {
                        "name": {
                            "type": "string",
                            "description": 'Unique key (no spaces, use hyphens), e.g. "payment-service"'
                        },
                        "label": {
                            "type": "string",
                            "description": 'Human-readable name, e.g. "Payment Service"'
                        },
                        "description": {
                            "type": "string",
                            "description": "Short description of what this system does"
                        },
                        "external": {
                            "type": "boolean",
                            "description": (
                                "true if this is a third-party system not owned by us "
                                "(e.g. Stripe, Slack)"
                            )
                        }
                    },
                    "required": ["name", "label", "description"]
                },
                risk_level=RiskLevel.SAFE,
            ),
            ToolSchema(
                name='remember_person',
                description=(
                    'Store a person, user type, or role in the architecture memory. '
                    'Use for actors and personas in the system context (C4 "Person" element).'
                ),
                parameters={
                    "type": "object",
                    "properties": {
                        "name": {
                            "type": "string",
                            "description": 'Unique key, e.g. "end-user" or "admin"'
                        },
                        "label": {
                            "type": "string",
                            "description": 'Human-readable name or role, e.g. "End User" or "Admin"'
                        },
                        "description": {
                            "type": "string",
                            "description": "What this person does in the system context"
                        }
                    },
                    "required": ["name", "label"]
                },
                risk_level=RiskLevel.SAFE,
            ),
            ToolSchema(
                name='remember_relationship',
                description=(
                    'Store a relationship between two systems or people in the architecture '
                    'memory. Use the keys from remember_system / remember_person.'
                ),
                parameters={
                    "type": "object",
                    "properties": {
                        "from": {
                            "type": "string",
                            "description": "Key of the source system or person"
                        },
                        "to": {
                            "type": "string",
                            "description": "Key of the target system or person"
                        },
                        "label": {
                            "type": "string",
                            "description": 'Description of the relationship, e.g. "Sends payments to"'
                        }
                    },
                    "required": ["from", "to", "label"]
                },
                risk_level=RiskLevel.SAFE,
            ),
            ToolSchema(
                name='generate_diagram',
                description=(
                    'Generate a C4 Context architecture diagram from the stored systems, '
                    'people, and relationships. Returns diagram DSL that can be pasted '
                    'into a renderer.'
                ),
                parameters={
                    "type": "object",
                    "properties": {
                        "format": {
                            "type": "string",
                            "enum": list(DIAGRAM_FORMATS),
                            "description": (
                                "Output format. plantuml (default): paste into any PlantUML "
                                "renderer. mermaid: renders in GitHub/Notion/Obsidian. "
                                "likec4: use with npx likec4 start."
                            )
                        }
                    },
                    "required": []
                },
                risk_level=RiskLevel.SAFE,
            ),
        ]

    def get_function_declarations(self) -> List[types.FunctionDeclaration]:
        """Return the tool declarations as Google GenAI FunctionDeclarations."""
        return [tool_schema_to_sdk(s) for s in self.get_tool_schemas()]

    def get_executors(self) -> Dict[str, Callable[[Dict[str, Any]], Any]]:
        """Return tool executors, plus the 'architecture' user command."""
        return {
            "remember_system": self._execute_remember_system,
            "remember_person": self._execute_remember_person,
            "remember_relationship": self._execute_remember_relationship,
            "generate_diagram": self._execute_generate_diagram,
            "architecture": self._execute_show_architecture,
        }

    def get_system_instructions(self) -> Optional[str]:
        """Return tool guidance followed by the remembered architecture, if any."""
        instructions = (
            "# Architecture Memory\n\n"
            "You can remember the architecture of the user's systems across conversations.\n\n"
            "- Use `remember_system` for software systems, services, databases and "
            "external platforms (set external=true for third-party systems)\n"
            "- Use `remember_person` for users, roles and other actors\n"
            "- Use `remember_relationship` to record how they interact, using the keys "
            "you stored them under\n"
            "- Use `generate_diagram` when the user asks for an architecture or context "
            "diagram (plantuml, mermaid or likec4)\n"
        )
        summary = self._summary()
        if summary:
            instructions += f"\n## Known architecture\n\n{summary}\n"
        return instructions

    def get_auto_approved_tools(self) -> List[str]:
        """Return the safe tools and the user command."""
        return auto_approved_tool_names(self.get_tool_schemas()) + ["architecture"]

    def get_user_commands(self) -> List[UserCommand]:
        """Return user-facing commands for direct invocation."""
        return [
            UserCommand("architecture", "Show the remembered architecture", share_with_model=False),
        ]

    def _summary(self) -> Optional[str]:
        if not self._store:
            return None
        try:
            return self._store.get_summary_text()
        except Exception as e:
            logger.warning("Could not summarize architecture memory: %s", e)
            return None

    # ===== Tool Executors =====

    def _execute_remember_system(self, args: Dict[str, Any]) -> str:
        """Execute remember_system tool."""
        if not self._store:
            return NOT_INITIALIZED
        try:
            self._store.add_system(
                args["name"],
                args["label"],
                args["description"],
                args.get("external", False),
            )
        except Exception as e:
            logger.warning("remember_system failed: %s", e)
        return NOTED

    def _execute_remember_person(self, args: Dict[str, Any]) -> str:
        """Execute remember_person tool."""
        if not self._store:
            return NOT_INITIALIZED
        try:
            self._store.add_person(args["name"], args["label"], args.get("description") or "")
        except Exception as e:
            logger.warning("remember_person failed: %s", e)
        return NOTED

    def _execute_remember_relationship(self, args: Dict[str, Any]) -> str:
        """Execute remember_relationship tool."""
        if not self._store:
            return NOT_INITIALIZED
        try:
            self._store.add_relationship(args["from"], args["to"], args["label"])
        except Exception as e:
            logger.warning("remember_relationship failed: %s", e)
        return NOTED

    def _execute_generate_diagram(self, args: Optional[Dict[str, Any]] = None) -> str:
        """Execute generate_diagram tool.

        Args:
            args: Tool arguments (format, optional)

        Returns:
            Diagram source, or an error message.
        """
        if not self._store:
            return NOT_INITIALIZED
        args = args or {}
        fmt = args.get("format") or self._config.default_format
        try:
            snapshot = self._store.get_snapshot()
            return render_diagram(
                snapshot.systems,
                snapshot.people,
                snapshot.relationships,
                fmt,
            )
        except Exception as e:
            logger.warning("generate_diagram failed: %s", e)
            return f"Error generating diagram: {e}"

    def _execute_show_architecture(self, args: Optional[Dict[str, Any]] = None) -> str:
        """Execute the 'architecture' user command."""
        if not self._store:
            return NOT_INITIALIZED
        return self._summary() or NO_ARCHITECTURE


def create_plugin() -> ArchitecturePlugin:
    """Factory function to create the architecture plugin instance.

    Returns:
        ArchitecturePlugin instance
    """
    return ArchitecturePlugin()
