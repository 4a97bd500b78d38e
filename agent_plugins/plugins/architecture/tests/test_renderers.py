"""Tests for the C4 diagram renderers."""

import re

import pytest

from ..models import Person, Relationship, System
from ..renderers import (
    PLANTUML_C4_INCLUDE,
    DiagramFormat,
    LikeC4Printer,
    build_document,
    element_id,
    render_diagram,
    render_likec4,
    render_mermaid,
    render_plantuml,
    resolve_format,
)


@pytest.fixture
def graph():
    """The end-user / API gateway / Stripe example."""
    people = {"end-user": Person("end-user", "End User")}
    systems = {
        "api": System("api", "API Gateway", "Routes traffic", False),
        "stripe": System("stripe", "Stripe", "Payments", True),
    }
    relationships = [Relationship("api", "stripe", "Sends charges to")]
    return systems, people, relationships


def likec4_braces_balanced(text):
    """Check brace balance outside of quoted strings."""
    stripped = re.sub(r"'(?:\\.|[^'\\])*'", "''", text)
    depth = 0
    for ch in stripped:
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


class TestBuildDocument:
    """Tests for the intermediate document."""

    def test_people_before_systems(self, graph):
        document = build_document(*graph)
        assert [d.key for d in document.declarations] == ["end-user", "api", "stripe"]
        assert [d.kind for d in document.declarations] == ["person", "system", "system"]

    def test_edges_keep_order(self):
        rels = [Relationship("b", "c", "2"), Relationship("a", "b", "1")]
        document = build_document({}, {}, rels)
        assert [(e.source, e.target) for e in document.edges] == [("b", "c"), ("a", "b")]

    @pytest.mark.parametrize("key, expected", [
        ("end-user", "end-user"),
        ("api_v2", "api_v2"),
        ("web app", "web_app"),
        ("x,y)", "x_y_"),
        ("caf\u00e9", "caf_"),
        ("", "_"),
    ])
    def test_element_id(self, key, expected):
        assert element_id(key) == expected

    def test_keys_become_identifiers(self):
        systems = {"web app": System("web app", "Web App", "")}
        people = {"end user": Person("end user", "End User")}
        rels = [Relationship("end user", "web app", "Uses")]
        document = build_document(systems, people, rels)
        assert [d.key for d in document.declarations] == ["end_user", "web_app"]
        assert [(e.source, e.target) for e in document.edges] == [("end_user", "web_app")]


class TestPlantUML:
    """Tests for render_plantuml."""

    def test_example_graph(self, graph):
        assert render_plantuml(*graph) == "\n".join([
            "@startuml",
            f"!include {PLANTUML_C4_INCLUDE}",
            "",
            "title System Context Diagram",
            "",
            'Person(end-user, "End User", "")',
            'System(api, "API Gateway", "Routes traffic")',
            'System_Ext(stripe, "Stripe", "Payments")',
            "",
            'Rel(api, stripe, "Sends charges to")',
            "",
            "@enduml",
        ])

    def test_empty_graph(self):
        assert render_plantuml({}, {}, []) == "\n".join([
            "@startuml",
            f"!include {PLANTUML_C4_INCLUDE}",
            "",
            "title System Context Diagram",
            "",
            "",
            "@enduml",
        ])

    def test_no_relationship_block_without_edges(self, graph):
        systems, people, _ = graph
        output = render_plantuml(systems, people, [])
        assert "Rel(" not in output
        assert output.endswith('System_Ext(stripe, "Stripe", "Payments")\n\n@enduml')

    def test_embedded_double_quote_replaced(self):
        systems = {"api": System("api", 'The "Gateway"', 'Says "hi"')}
        output = render_plantuml(systems, {}, [])
        assert "System(api, \"The 'Gateway'\", \"Says 'hi'\")" in output

    def test_newline_becomes_label_break(self):
        people = {"u": Person("u", "User", "line one\nline two")}
        output = render_plantuml({}, people, [])
        assert 'Person(u, "User", "line one\\nline two")' in output

    def test_backslash_escaped(self):
        systems = {"fs": System("fs", "Share", "C:\\new")}
        output = render_plantuml(systems, {}, [])
        assert 'System(fs, "Share", "C:\\\\new")' in output

    def test_backslash_before_newline(self):
        people = {"u": Person("u", "User", "ends with \\\nnext")}
        output = render_plantuml({}, people, [])
        assert 'Person(u, "User", "ends with \\\\\\nnext")' in output

    def test_awkward_keys(self):
        systems = {"web app": System("web app", "Web App", "")}
        rels = [Relationship("x,y)", "web app", "calls")]
        output = render_plantuml(systems, {}, rels)
        assert 'System(web_app, "Web App", "")' in output
        assert 'Rel(x_y_, web_app, "calls")' in output


class TestMermaid:
    """Tests for render_mermaid."""

    def test_example_graph(self, graph):
        assert render_mermaid(*graph) == "\n".join([
            "C4Context",
            '  Person(end-user, "End User", "")',
            '  System(api, "API Gateway", "Routes traffic")',
            '  System_Ext(stripe, "Stripe", "Payments")',
            '  Rel(api, stripe, "Sends charges to")',
        ])

    def test_empty_graph(self):
        assert render_mermaid({}, {}, []) == "C4Context"

    def test_only_relationships(self):
        output = render_mermaid({}, {}, [Relationship("a", "b", "calls")])
        assert output == 'C4Context\n  Rel(a, b, "calls")'

    def test_quotes_and_newlines_escaped(self):
        rels = [Relationship("a", "b", 'says "hello"\nloudly')]
        output = render_mermaid({}, {}, rels)
        assert "Rel(a, b, \"says 'hello' loudly\")" in output

    def test_awkward_keys(self):
        people = {"end user": Person("end user", "End User")}
        rels = [Relationship("end user", "a)b", "calls")]
        output = render_mermaid({}, people, rels)
        assert '  Person(end_user, "End User", "")' in output
        assert '  Rel(end_user, a_b, "calls")' in output


class TestLikeC4:
    """Tests for render_likec4."""

    def test_example_graph(self, graph):
        assert render_likec4(*graph) == "\n".join([
            "specification {",
            "  element system",
            "  element person",
            "  tag external",
            "}",
            "",
            "model {",
            "  person end-user 'End User' {",
            "    description ''",
            "  }",
            "  system api 'API Gateway' {",
            "    description 'Routes traffic'",
            "  }",
            "  system stripe 'Stripe' {",
            "    #external",
            "    description 'Payments'",
            "  }",
            "  api -> stripe 'Sends charges to'",
            "}",
            "",
            "views {",
            "  view index {",
            "    include *",
            "  }",
            "}",
        ])

    def test_empty_graph_has_no_body(self):
        output = render_likec4({}, {}, [])
        assert "model {\n}" in output
        assert likec4_braces_balanced(output)

    def test_braces_balanced(self, graph):
        assert likec4_braces_balanced(render_likec4(*graph))

    def test_braces_balanced_with_awkward_text(self):
        systems = {"x": System("x", "it's {odd}", "back\\slash } '", True)}
        rels = [Relationship("x", "y", "{{")]
        assert likec4_braces_balanced(render_likec4(systems, {}, rels))

    def test_single_quote_escaped(self):
        people = {"o": Person("o", "O'Brien", "Owner's account")}
        output = render_likec4({}, people, [])
        assert "person o 'O\\'Brien' {" in output
        assert "description 'Owner\\'s account'" in output

    def test_backslash_escaped(self):
        assert LikeC4Printer().quote("C:\\data") == "'C:\\\\data'"

    def test_awkward_keys(self):
        systems = {"web app": System("web app", "Web App", "Serves pages")}
        rels = [Relationship("web app", "db {main}", "reads")]
        output = render_likec4(systems, {}, rels)
        assert "  system web_app 'Web App' {" in output
        assert "  web_app -> db__main_ 'reads'" in output
        assert likec4_braces_balanced(output)


class TestRenderDiagram:
    """Tests for format dispatch."""

    @pytest.mark.parametrize("fmt, marker", [
        ("plantuml", "@startuml"),
        ("mermaid", "C4Context"),
        ("likec4", "specification {"),
        (DiagramFormat.LIKEC4, "specification {"),
    ])
    def test_dispatch(self, graph, fmt, marker):
        assert marker in render_diagram(*graph, fmt=fmt)

    @pytest.mark.parametrize("fmt", [None, "", "graphviz", "PLANTUML", 42])
    def test_unknown_format_falls_back_to_plantuml(self, graph, fmt):
        assert render_diagram(*graph, fmt=fmt) == render_diagram(*graph, fmt="plantuml")

    def test_resolve_format(self):
        assert resolve_format("mermaid") is DiagramFormat.MERMAID
        assert resolve_format("nope") is DiagramFormat.PLANTUML
        assert resolve_format(None) is DiagramFormat.PLANTUML

    def test_end_to_end_example(self, graph):
        plantuml = render_diagram(*graph, fmt="plantuml")
        assert 'Person(end-user, "End User", "")' in plantuml
        assert 'System(api, "API Gateway", "Routes traffic")' in plantuml
        assert 'System_Ext(stripe, "Stripe", "Payments")' in plantuml
        assert 'Rel(api, stripe, "Sends charges to")' in plantuml

        mermaid = render_diagram(*graph, fmt="mermaid")
        assert "C4Context" in mermaid
        assert 'Person(end-user, "End User", "")' in mermaid
        assert 'System_Ext(stripe, "Stripe", "Payments")' in mermaid

        likec4 = render_diagram(*graph, fmt="likec4")
        assert "specification {" in likec4
        assert "model {" in likec4
        for key in ("end-user", "api", "stripe"):
            assert re.search(rf"^  (person|system) {re.escape(key)} '.*' {{$", likec4, re.M)
