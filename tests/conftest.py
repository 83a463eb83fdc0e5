"""Pytest configuration and shared fixtures."""

import pytest

from docweave.composition import Document, DocumentSnapshot


def make_doc(doc_id: str, content: str = "", components=None, **kwargs) -> Document:
    """Build a document; composite whenever components are given."""
    return Document(
        id=doc_id,
        title=kwargs.pop("title", doc_id.upper()),
        content=content,
        components=components,
        is_composite=kwargs.pop("is_composite", components is not None),
        **kwargs,
    )


@pytest.fixture
def group_documents() -> list[Document]:
    """Root A referencing group G (members B:t1, C:t2) plus loose docs D and E."""
    return [
        make_doc("a", "Intro {{x}} end", {"x": "group:g:t2"}, title="Root"),
        make_doc("b", "B body", group_id="g", document_type="t1", title="Variant B"),
        make_doc("c", "C body", group_id="g", document_type="t2", title="Variant C"),
        make_doc("d", "D body", title="Replacement D"),
        make_doc("e", "E body", title="Replacement E"),
    ]


@pytest.fixture
def group_snapshot(group_documents) -> DocumentSnapshot:
    return DocumentSnapshot(group_documents)


@pytest.fixture
def nested_snapshot() -> DocumentSnapshot:
    """
    Three levels of composition:

    root -> {{header}} -> header (composite) -> {{logo}} -> logo
         -> {{body}}   -> body
    """
    return DocumentSnapshot(
        [
            make_doc(
                "root",
                "{{header}}\n\n{{body}}",
                {"header": "header", "body": "body"},
                title="Page",
            ),
            make_doc("header", "# Title {{logo}}", {"logo": "logo"}, title="Header"),
            make_doc("logo", "[logo]", title="Logo"),
            make_doc("body", "Body text", title="Body"),
        ]
    )


@pytest.fixture
def cyclic_snapshot() -> DocumentSnapshot:
    """A -> {{y}} -> B -> {{z}} -> A."""
    return DocumentSnapshot(
        [
            make_doc("a", "A says {{y}}", {"y": "b"}),
            make_doc("b", "B says {{z}}", {"z": "a"}),
        ]
    )
