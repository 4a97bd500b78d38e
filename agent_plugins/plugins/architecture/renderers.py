"""C4 Context diagram renderers.

The graph is first turned into a DiagramDocument (a flat list of typed
declarations followed by edges) and then printed by one printer per
notation. Printers own their quoting rules, so escaping is decided in one
place per format:

- PlantUML and Mermaid use C4 macros with double-quoted arguments. These
  strings have no escape sequence, so an embedded ``"`` becomes ``'``.
  C4-PlantUML reads a backslash followed by ``n`` as a line break, so
  PlantUML doubles every backslash before encoding newlines that way.
- LikeC4 uses single-quoted strings with backslash escapes.

Element keys become identifiers: every character outside
``[A-Za-z0-9_-]`` is replaced by ``_``. Keys that differ only in such
characters therefore share one identifier in the output.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

from .models import Person, Relationship, System


class DiagramFormat(str, Enum):
    """Supported diagram notations."""
    PLANTUML = "plantuml"
    MERMAID = "mermaid"
    LIKEC4 = "likec4"


DEFAULT_FORMAT = DiagramFormat.PLANTUML
DIAGRAM_FORMATS = [f.value for f in DiagramFormat]

PLANTUML_C4_INCLUDE = (
    "https://raw.githubusercontent.com/plantuml-stdlib/C4-PlantUML/master/C4_Context.puml"
)
DIAGRAM_TITLE = "System Context Diagram"

PERSON = "person"
SYSTEM = "system"

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_-]")


@dataclass(frozen=True)
class Declaration:
    """A person or system element."""
    kind: str
    key: str
    label: str
    description: str = ""
    external: bool = False


@dataclass(frozen=True)
class Edge:
    """A directed relationship between two element keys."""
    source: str
    target: str
    label: str


@dataclass
class DiagramDocument:
    """Notation-independent content of a context diagram.

    Declarations hold people first, then systems; edges keep stored order.
    """
    declarations: List[Declaration] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)


def element_id(key: str) -> str:
    """Turn an element key into an identifier every notation accepts."""
    return _NON_IDENTIFIER.sub("_", key) or "_"


def build_document(
    systems: Dict[str, System],
    people: Dict[str, Person],
    relationships: Iterable[Relationship]
) -> DiagramDocument:
    """Collect the graph into a DiagramDocument, preserving mapping order."""
    declarations = [
        Declaration(PERSON, element_id(key), p.label, p.description)
        for key, p in people.items()
    ]
    declarations.extend(
        Declaration(SYSTEM, element_id(key), s.label, s.description, s.external)
        for key, s in systems.items()
    )
    edges = [Edge(element_id(r.source), element_id(r.target), r.label) for r in relationships]
    return DiagramDocument(declarations=declarations, edges=edges)


def _single_line(text: str, separator: str = " ") -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n").replace("\n", separator)


class DiagramPrinter:
    """Base class for notation printers."""

    format: DiagramFormat
    quote_char = '"'

    def escape(self, text: str) -> str:
        """Make text safe to place between quote_char delimiters."""
        raise NotImplementedError

    def quote(self, text: Optional[str]) -> str:
        return f"{self.quote_char}{self.escape(text or '')}{self.quote_char}"

    def lines(self, document: DiagramDocument) -> List[str]:
        raise NotImplementedError

    def render(self, document: DiagramDocument) -> str:
        return "\n".join(self.lines(document))


class C4MacroPrinter(DiagramPrinter):
    """Shared macro syntax of C4-PlantUML and Mermaid C4 diagrams."""

    line_break = " "

    def escape(self, text: str) -> str:
        return _single_line(text.replace('"', "'"), self.line_break)

    def macro(self, declaration: Declaration) -> str:
        if declaration.kind == PERSON:
            return "Person"
        return "System_Ext" if declaration.external else "System"

    def declaration(self, declaration: Declaration) -> str:
        return (
            f"{self.macro(declaration)}({declaration.key}, "
            f"{self.quote(declaration.label)}, {self.quote(declaration.description)})"
        )

    def edge(self, edge: Edge) -> str:
        return f"Rel({edge.source}, {edge.target}, {self.quote(edge.label)})"


class PlantUMLPrinter(C4MacroPrinter):
    """C4-PlantUML context diagram."""

    format = DiagramFormat.PLANTUML
    # C4-PlantUML renders a literal \n in labels as a line break.
    line_break = "\\n"

    def escape(self, text: str) -> str:
        return super().escape(text.replace("\\", "\\\\"))

    def lines(self, document: DiagramDocument) -> List[str]:
        lines = [
            "@startuml",
            f"!include {PLANTUML_C4_INCLUDE}",
            "",
            f"title {DIAGRAM_TITLE}",
            "",
        ]
        lines.extend(self.declaration(d) for d in document.declarations)
        if document.edges:
            lines.append("")
            lines.extend(self.edge(e) for e in document.edges)
        lines.append("")
        lines.append("@enduml")
        return lines


class MermaidPrinter(C4MacroPrinter):
    """Mermaid C4Context diagram."""

    format = DiagramFormat.MERMAID
    indent = "  "

    def lines(self, document: DiagramDocument) -> List[str]:
        lines = ["C4Context"]
        lines.extend(self.indent + self.declaration(d) for d in document.declarations)
        lines.extend(self.indent + self.edge(e) for e in document.edges)
        return lines


class LikeC4Printer(DiagramPrinter):
    """LikeC4 model with a single catch-all view."""

    format = DiagramFormat.LIKEC4
    quote_char = "'"
    indent = "  "

    def escape(self, text: str) -> str:
        return _single_line(text.replace("\\", "\\\\").replace("'", "\\'"))

    def element(self, declaration: Declaration) -> List[str]:
        inner = self.indent * 2
        lines = [
            f"{self.indent}{declaration.kind} {declaration.key} "
            f"{self.quote(declaration.label)} {{"
        ]
        # Tags must precede the other statements of an element body.
        if declaration.external:
            lines.append(f"{inner}#external")
        lines.append(f"{inner}description {self.quote(declaration.description)}")
        lines.append(f"{self.indent}}}")
        return lines

    def edge(self, edge: Edge) -> str:
        return f"{self.indent}{edge.source} -> {edge.target} {self.quote(edge.label)}"

    def lines(self, document: DiagramDocument) -> List[str]:
        lines = [
            "specification {",
            f"{self.indent}element {SYSTEM}",
            f"{self.indent}element {PERSON}",
            f"{self.indent}tag external",
            "}",
            "",
            "model {",
        ]
        for declaration in document.declarations:
            lines.extend(self.element(declaration))
        lines.extend(self.edge(e) for e in document.edges)
        lines.extend([
            "}",
            "",
            "views {",
            f"{self.indent}view index {{",
            f"{self.indent * 2}include *",
            f"{self.indent}}}",
            "}",
        ])
        return lines


PRINTERS: Dict[DiagramFormat, DiagramPrinter] = {
    DiagramFormat.PLANTUML: PlantUMLPrinter(),
    DiagramFormat.MERMAID: MermaidPrinter(),
    DiagramFormat.LIKEC4: LikeC4Printer(),
}


def resolve_format(fmt: Union[DiagramFormat, str, None]) -> DiagramFormat:
    """Map a format identifier to a DiagramFormat, falling back to PlantUML."""
    if isinstance(fmt, DiagramFormat):
        return fmt
    try:
        return DiagramFormat(fmt)
    except ValueError:
        return DEFAULT_FORMAT


def render_plantuml(
    systems: Dict[str, System],
    people: Dict[str, Person],
    relationships: Iterable[Relationship]
) -> str:
    """Render a C4-PlantUML context diagram."""
    return PRINTERS[DiagramFormat.PLANTUML].render(
        build_document(systems, people, relationships)
    )


def render_mermaid(
    systems: Dict[str, System],
    people: Dict[str, Person],
    relationships: Iterable[Relationship]
) -> str:
    """Render a Mermaid C4Context diagram."""
    return PRINTERS[DiagramFormat.MERMAID].render(
        build_document(systems, people, relationships)
    )


def render_likec4(
    systems: Dict[str, System],
    people: Dict[str, Person],
    relationships: Iterable[Relationship]
) -> str:
    """Render a LikeC4 specification, model and index view."""
    return PRINTERS[DiagramFormat.LIKEC4].render(
        build_document(systems, people, relationships)
    )


def render_diagram(
    systems: Dict[str, System],
    people: Dict[str, Person],
    relationships: Iterable[Relationship],
    fmt: Union[DiagramFormat, str, None] = None
) -> str:
    """Render the graph in the requested format.

    Args:
        systems: Systems keyed by element key.
        people: People keyed by element key.
        relationships: Directed edges in stored order.
        fmt: 'plantuml', 'mermaid' or 'likec4'. Anything else, including
            None, renders PlantUML.
    """
    printer = PRINTERS[resolve_format(fmt)]
    return printer.render(build_document(systems, people, relationships))
