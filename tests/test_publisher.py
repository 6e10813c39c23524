"""
Publish generated API documentation to Confluence wiki.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from restdocs2conf.environment import ConfluenceError, ProtocolError, SynchronizationError
from restdocs2conf.publisher import Publisher
from restdocs2conf.scanner import DocumentSet
from tests.utility import InMemoryGateway, TypedTestCase, make_page

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
)


class TestPublisher(TypedTestCase):
    def test_parent_and_children(self) -> None:
        gateway = InMemoryGateway()
        documents = DocumentSet(
            parent_name="index.html",
            parent_content="<p>index</p>",
            children={"createUser.html": "<p>create</p>", "deleteUser.html": "<p>delete</p>"},
        )

        result = Publisher(gateway, "DOCS").synchronize(documents, "100")

        self.assertListEqual(gateway.lookups, ["Index", "Create User", "Delete User"])
        parent = gateway.pages[result.parent_id]
        self.assertEqual(parent.title, "Index")
        self.assertEqual(parent.parent_id, "100")
        self.assertListEqual(list(result.children.keys()), ["Create User", "Delete User"])
        for page_id in result.children.values():
            self.assertEqual(gateway.pages[page_id].parent_id, result.parent_id)

    def test_no_children(self) -> None:
        gateway = InMemoryGateway()
        documents = DocumentSet(parent_name="index.html", parent_content="<p>index</p>")

        result = Publisher(gateway, "DOCS").synchronize(documents, "100")

        self.assertEqual(result.children, {})
        self.assertEqual(len(gateway.created), 1)

    def test_partial_failure(self) -> None:
        gateway = InMemoryGateway()
        gateway.failures["Second"] = ProtocolError("GET request failed", status_code=500, body="internal error")
        documents = DocumentSet(
            parent_name="index.html",
            parent_content="<p>index</p>",
            children={"first.html": "1", "second.html": "2", "third.html": "3"},
        )

        with self.assertRaises(SynchronizationError) as cm:
            Publisher(gateway, "DOCS").synchronize(documents, "100")

        error = cm.exception
        self.assertListEqual(list(error.failures.keys()), ["Second"])
        self.assertIsInstance(error.failures["Second"], ProtocolError)
        self.assertIn("Second", str(error))
        self.assertIn("internal error", str(error))
        self.assertNotIn("First", str(error))

        # all children have been attempted, and the first and third have been created
        self.assertListEqual(gateway.lookups, ["Index", "First", "Second", "Third"])
        self.assertListEqual([page.title for page in gateway.created], ["Index", "First", "Third"])
        self.assertEqual(error.parent_id, "1000")

    def test_fail_fast_on_parent(self) -> None:
        gateway = InMemoryGateway()
        gateway.failures["Index"] = ConfluenceError("unreachable")
        documents = DocumentSet(
            parent_name="index.html",
            parent_content="<p>index</p>",
            children={"first.html": "1", "second.html": "2"},
        )

        with self.assertRaises(ConfluenceError) as cm:
            Publisher(gateway, "DOCS").synchronize(documents, "100")

        self.assertNotIsInstance(cm.exception, SynchronizationError)
        self.assertListEqual(gateway.lookups, ["Index"])
        self.assertEqual(gateway.mutations, 0)

    def test_updates_existing_pages(self) -> None:
        gateway = InMemoryGateway(
            make_page("1", "Index", "<p>index</p>", version=2, parent_id="100"),
            make_page("2", "First", "old", version=5, parent_id="1"),
        )
        documents = DocumentSet(parent_name="index.html", parent_content="<p>index</p>", children={"first.html": "new"})

        result = Publisher(gateway, "DOCS").synchronize(documents, "100")

        self.assertEqual(result.parent_id, "1")
        self.assertEqual(result.children, {"First": "2"})
        self.assertEqual(len(gateway.created), 0)
        self.assertListEqual([page.id for page in gateway.updated], ["2"])
        self.assertEqual(gateway.pages["2"].version.number, 6)

    def test_process_directory(self) -> None:
        with TemporaryDirectory() as tmp_dir:
            docs_dir = Path(tmp_dir)
            (docs_dir / "index.html").write_text("<p>index</p>", encoding="utf-8")
            (docs_dir / "Children").mkdir()
            (docs_dir / "Children" / "listUsers.html").write_text("<p>list</p>", encoding="utf-8")

            gateway = InMemoryGateway()
            result = Publisher(gateway, "DOCS").process(docs_dir, ancestor_id="100")

        assert result is not None
        self.assertListEqual(list(result.children.keys()), ["List Users"])
        self.assertEqual(gateway.pages[result.children["List Users"]].content, "<p>list</p>")

    def test_process_missing_or_empty_directory(self) -> None:
        with TemporaryDirectory() as tmp_dir:
            gateway = InMemoryGateway()
            publisher = Publisher(gateway, "DOCS")

            self.assertIsNone(publisher.process(Path(tmp_dir), ancestor_id="100"))
            self.assertIsNone(publisher.process(Path(tmp_dir) / "missing", ancestor_id="100"))
            self.assertEqual(gateway.lookups, [])


if __name__ == "__main__":
    unittest.main()
