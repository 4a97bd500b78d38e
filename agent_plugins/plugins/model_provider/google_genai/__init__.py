"""Google GenAI (Vertex AI / Gemini) tool declaration support.

Usage:
    from agent_plugins.plugins.model_provider.google_genai import tool_schema_to_sdk

    declarations = [tool_schema_to_sdk(s) for s in plugin.get_tool_schemas()]
"""

from .converters import tool_schema_to_sdk

__all__ = ["tool_schema_to_sdk"]
