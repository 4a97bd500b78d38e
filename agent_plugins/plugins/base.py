"""Base protocol for tool plugins."""

from typing import Protocol, List, Dict, Any, Callable, Optional, NamedTuple, runtime_checkable
from google.genai import types

from .model_provider.types import RiskLevel, ToolSchema


class UserCommand(NamedTuple):
    """Declaration of a user-facing command.

    User commands can be invoked directly by the user (human or agent)
    without going through the model's function calling.

    Attributes:
        name: Command name for invocation and autocompletion.
        description: Brief description shown in autocompletion/help.
        share_with_model: If True, command output is added to conversation
            history so the model can see/use it. If False (default),
            output is only shown to the user.
    """
    name: str
    description: str
    share_with_model: bool = False


def auto_approved_tool_names(schemas: List[ToolSchema]) -> List[str]:
    """Return the names of the tools classified as safe, in declaration order."""
    return [s.name for s in schemas if s.risk_level == RiskLevel.SAFE]


@runtime_checkable
class ToolPlugin(Protocol):
    """Interface that all tool plugins must implement.

    Plugins provide two types of capabilities:
    1. Model tools: Functions the AI model can invoke via function calling
    2. User commands: Commands the user can invoke directly (without model mediation)

    Model tools are declared via get_tool_schemas() (provider-agnostic) or
    get_function_declarations() (Google GenAI SDK types) and executed via
    get_executors(). User commands are declared via get_user_commands().

    Every executor returns a string the host relays verbatim; executors must
    not let exceptions escape.
    """

    @property
    def name(self) -> str:
        """Unique identifier for this plugin."""
        ...

    def get_tool_schemas(self) -> List[ToolSchema]:
        """Return provider-agnostic declarations for this plugin's tools."""
        ...

    def get_function_declarations(self) -> List[types.FunctionDeclaration]:
        """Return Google GenAI FunctionDeclaration objects for this plugin's tools."""
        ...

    def get_executors(self) -> Dict[str, Callable[[Dict[str, Any]], Any]]:
        """Return a mapping of tool names to their executor callables.

        Each executor accepts a dict of already-validated arguments.
        """
        ...

    def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Called once when the plugin is enabled.

        Args:
            config: Optional configuration dict for plugin-specific settings.
        """
        ...

    def shutdown(self) -> None:
        """Called when the plugin is disabled. Clean up resources here."""
        ...

    def get_system_instructions(self) -> Optional[str]:
        """Return system instructions describing this plugin's capabilities.

        Returns:
            A string with instructions, or None if no instructions are needed.
        """
        ...

    def get_auto_approved_tools(self) -> List[str]:
        """Return tool/command names that run without permission prompts.

        Tools classified as RiskLevel.SAFE and user commands belong here.
        """
        ...

    def get_user_commands(self) -> List[UserCommand]:
        """Return user-facing commands this plugin provides.

        Most plugins only provide model tools and return an empty list here.
        """
        ...
