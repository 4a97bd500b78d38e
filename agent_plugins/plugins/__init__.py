"""Plugin system for the agent runtime.

Each plugin lives in its own subpackage exposing ``PLUGIN_KIND`` and a
``create_plugin()`` factory, which is how the host runtime discovers it.

Usage:
    from agent_plugins.plugins.architecture import create_plugin

    plugin = create_plugin()
    plugin.initialize({"storage_path": "data/architecture.json"})

    schemas = plugin.get_tool_schemas()
    executors = plugin.get_executors()
    executors["remember_system"]({"name": "api", "label": "API", "description": "Routes traffic"})
"""

from .base import ToolPlugin, UserCommand, auto_approved_tool_names
from .model_provider.types import RiskLevel, ToolSchema

__all__ = ['ToolPlugin', 'UserCommand', 'RiskLevel', 'ToolSchema', 'auto_approved_tool_names']
