"""Provider-agnostic model types shared by all plugins."""

from .types import RiskLevel, ToolSchema

__all__ = ["RiskLevel", "ToolSchema"]
