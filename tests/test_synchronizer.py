"""
Publish generated API documentation to Confluence wiki.

Copyright 2022-2026, Levente Hunyadi
"""

import unittest
from unittest.mock import MagicMock

from restdocs2conf.api_types import ConfluenceContentType, ConfluencePageRef, ConfluencePageSummary, ConfluenceRepresentation, ConfluenceStatus
from restdocs2conf.environment import PageError, ProtocolError, TransportError
from restdocs2conf.synchronizer import PageSynchronizer, SynchronizationAction
from tests.utility import InMemoryGateway, TypedTestCase, make_page


class TestPageSynchronizer(TypedTestCase):
    def test_create_on_absent(self) -> None:
        gateway = InMemoryGateway()
        synchronizer = PageSynchronizer(gateway, "DOCS")

        result = synchronizer.synchronize("100", "<p>A</p>", "Cat")

        self.assertEqual(result.action, SynchronizationAction.CREATE)
        self.assertEqual(len(gateway.created), 1)
        self.assertEqual(len(gateway.updated), 0)

        page = gateway.created[0]
        self.assertEqual(page.type, ConfluenceContentType.PAGE)
        self.assertEqual(page.title, "Cat")
        self.assertEqual(page.space.key, "DOCS")
        self.assertEqual(page.content, "<p>A</p>")
        self.assertEqual(page.body.storage.representation, ConfluenceRepresentation.STORAGE)
        self.assertEqual(page.version.number, 1)
        self.assertListEqual(page.ancestors, [ConfluencePageRef(id="100")])
        self.assertEqual(gateway.pages[result.page_id].title, "Cat")

    def test_update_on_changed(self) -> None:
        gateway = InMemoryGateway(make_page("1", "Cat", "A", version=7, parent_id="100"))
        synchronizer = PageSynchronizer(gateway, "DOCS")

        page_id = synchronizer.save_or_update("200", "B", "Cat")

        self.assertEqual(page_id, "1")
        self.assertEqual(len(gateway.created), 0)
        self.assertEqual(len(gateway.updated), 1)

        page = gateway.updated[0]
        self.assertEqual(page.id, "1")
        self.assertEqual(page.content, "B")
        self.assertEqual(page.version.number, 8)
        self.assertEqual(page.title, "Cat")
        self.assertEqual(page.space.key, "DOCS")

        # ancestor is set only when a page is created
        self.assertEqual(page.parent_id, "100")

    def test_no_op_on_unchanged(self) -> None:
        gateway = InMemoryGateway(make_page("1", "Cat", "A", version=3))
        synchronizer = PageSynchronizer(gateway, "DOCS")

        result = synchronizer.synchronize("100", "A", "Cat")

        self.assertEqual(result.page_id, "1")
        self.assertEqual(result.action, SynchronizationAction.NONE)
        self.assertEqual(gateway.mutations, 0)
        self.assertEqual(gateway.pages["1"].version.number, 3)

    def test_idempotence(self) -> None:
        for gateway in (InMemoryGateway(), InMemoryGateway(make_page("1", "Cat", "old"))):
            with self.subTest(pages=list(gateway.pages)):
                synchronizer = PageSynchronizer(gateway, "DOCS")

                first = synchronizer.save_or_update("100", "new", "Cat")
                second = synchronizer.save_or_update("100", "new", "Cat")

                self.assertEqual(first, second)
                self.assertEqual(gateway.mutations, 1)

    def test_content_comparison_is_exact(self) -> None:
        gateway = InMemoryGateway(make_page("1", "Cat", "<p>A</p>"))
        synchronizer = PageSynchronizer(gateway, "DOCS")

        result = synchronizer.synchronize("100", "<p>A</p>\n", "Cat")

        self.assertEqual(result.action, SynchronizationAction.UPDATE)
        self.assertEqual(gateway.pages["1"].version.number, 2)

    def test_lookup_is_qualified_by_space(self) -> None:
        gateway = InMemoryGateway(make_page("1", "Cat", "A", space_key="OTHER"))
        synchronizer = PageSynchronizer(gateway, "DOCS")

        result = synchronizer.synchronize("100", "A", "Cat")

        self.assertEqual(result.action, SynchronizationAction.CREATE)
        self.assertNotEqual(result.page_id, "1")

    def test_page_vanished_after_search(self) -> None:
        gateway = MagicMock()
        gateway.find_page_by_title.return_value = ConfluencePageSummary(
            id="1", type=ConfluenceContentType.PAGE, status=ConfluenceStatus.CURRENT, title="Cat"
        )
        gateway.get_page.return_value = None
        synchronizer = PageSynchronizer(gateway, "DOCS")

        with self.assertRaises(PageError):
            synchronizer.save_or_update("100", "A", "Cat")
        gateway.create_page.assert_not_called()
        gateway.update_page.assert_not_called()

    def test_fetches_full_page_after_search(self) -> None:
        gateway = MagicMock()
        gateway.find_page_by_title.return_value = ConfluencePageSummary(
            id="1", type=ConfluenceContentType.PAGE, status=ConfluenceStatus.CURRENT, title="Cat"
        )
        gateway.get_page.return_value = make_page("1", "Cat", "A", version=2)
        gateway.update_page.return_value = "1"
        synchronizer = PageSynchronizer(gateway, "DOCS")

        self.assertEqual(synchronizer.save_or_update("100", "B", "Cat"), "1")
        gateway.find_page_by_title.assert_called_once_with("Cat", "DOCS")
        gateway.get_page.assert_called_once_with("1")
        gateway.update_page.assert_called_once_with(make_page("1", "Cat", "B", version=3))

    def test_gateway_errors_propagate(self) -> None:
        gateway = MagicMock()
        gateway.find_page_by_title.return_value = None
        gateway.create_page.side_effect = ProtocolError("POST request failed", status_code=400, body="bad request")
        synchronizer = PageSynchronizer(gateway, "DOCS")

        with self.assertRaises(ProtocolError) as cm:
            synchronizer.save_or_update("100", "A", "Cat")
        self.assertEqual(cm.exception.status_code, 400)
        self.assertEqual(cm.exception.body, "bad request")

        gateway.find_page_by_title.side_effect = TransportError("connection refused")
        with self.assertRaises(TransportError):
            synchronizer.save_or_update("100", "A", "Cat")

    def test_page_value_is_not_mutated(self) -> None:
        page = make_page("1", "Cat", "A", version=4)
        updated = page.with_content("B")

        self.assertEqual(page.content, "A")
        self.assertEqual(page.version.number, 4)
        self.assertEqual(updated.content, "B")
        self.assertEqual(updated.version.number, 5)
        self.assertListEqual(updated.ancestors, page.ancestors)


if __name__ == "__main__":
    unittest.main()
