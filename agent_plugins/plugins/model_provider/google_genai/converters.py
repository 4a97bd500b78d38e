"""Converters between internal tool types and Google GenAI SDK types.

Plugins declare their tools as ToolSchema objects; the Gemini/Vertex side
of the host needs FunctionDeclarations.
"""

from google.genai import types

from ..types import ToolSchema


def tool_schema_to_sdk(schema: ToolSchema) -> types.FunctionDeclaration:
    """Convert ToolSchema to SDK FunctionDeclaration.

    The risk level is not part of the SDK declaration; it stays with the
    host's approval gate.
    """
    return types.FunctionDeclaration(
        name=schema.name,
        description=schema.description,
        parameters_json_schema=schema.parameters
    )
