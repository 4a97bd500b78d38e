# agent_plugins package
#
# Unified import surface for plugins hosted by the agent runtime:
#
#   from agent_plugins import ArchitecturePlugin, ToolSchema, RiskLevel

# Plugin system
from .plugins.base import ToolPlugin, UserCommand
from .plugins.model_provider.types import RiskLevel, ToolSchema

# Plugins
from .plugins.architecture import ArchitecturePlugin, ArchitectureStore

__all__ = [
    # Plugin system
    "ToolPlugin",
    "UserCommand",
    "RiskLevel",
    "ToolSchema",
    # Plugins
    "ArchitecturePlugin",
    "ArchitectureStore",
]
