"""Provider-agnostic types for tool declarations.

These types abstract away provider-specific SDK types (e.g.,
google.genai.types.FunctionDeclaration) so plugins can declare their tools
once and have them converted for whichever provider the host runs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class RiskLevel(str, Enum):
    """Risk classification consumed by the host's approval gate."""
    SAFE = "safe"
    MODERATE = "moderate"
    DANGEROUS = "dangerous"


@dataclass
class ToolSchema:
    """Provider-agnostic tool/function declaration.

    Attributes:
        name: Unique tool name (e.g., 'remember_system').
        description: Human-readable description of what the tool does.
        parameters: JSON Schema object describing the tool's parameters.
        risk_level: How much scrutiny the host should apply before running it.
    """
    name: str
    description: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    risk_level: RiskLevel = RiskLevel.MODERATE

    @property
    def required(self) -> List[str]:
        """Names of the required parameters."""
        return list(self.parameters.get("required", []))
