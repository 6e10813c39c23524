"""
Publish generated API documentation to Confluence wiki.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .api_base import PageGateway
from .environment import ConfluenceError, PageError, SynchronizationError
from .scanner import DocumentSet, Scanner
from .synchronizer import PageSynchronizer
from .title import page_title

LOGGER = logging.getLogger(__name__)


@dataclass
class PublishResult:
    """
    Pages synchronized in a run.

    :param parent_id: Confluence page ID of the parent page.
    :param children: Maps child page titles to Confluence page IDs.
    """

    parent_id: str
    children: dict[str, str] = field(default_factory=dict)


class Publisher:
    """
    Publishes a parent document and its child documents to Confluence.

    The parent page is synchronized first, and each child page is placed under it. A child page that fails to synchronize does not prevent
    the remaining child pages from being synchronized; failures are reported together when all children have been processed.
    """

    synchronizer: PageSynchronizer

    def __init__(self, gateway: PageGateway, space_key: str) -> None:
        """
        :param gateway: Capability to look up and persist Confluence pages.
        :param space_key: Confluence space key for pages to be published.
        """

        self.synchronizer = PageSynchronizer(gateway, space_key)

    def process(
        self,
        docs_dir: Path,
        *,
        ancestor_id: str,
        index_file: str = "index.html",
        children_dir: str = "children",
    ) -> PublishResult | None:
        """
        Publishes documents found in a directory of generated documentation.

        :param docs_dir: Directory with generated documentation.
        :param ancestor_id: Confluence page ID under which the parent page is placed.
        :param index_file: Name of the parent document in the directory.
        :param children_dir: Name of the sub-directory that holds child documents.
        :returns: Synchronized pages, or `None` if there is nothing to publish.
        """

        if not docs_dir.is_dir():
            LOGGER.warning("Directory does not exist: %s", docs_dir)
            return None
        if not any(docs_dir.iterdir()):
            LOGGER.warning("Directory is empty: %s", docs_dir)
            return None

        documents = Scanner().read(docs_dir, index_file=index_file, children_dir=children_dir)
        return self.synchronize(documents, ancestor_id)

    def synchronize(self, documents: DocumentSet, ancestor_id: str) -> PublishResult:
        """
        Synchronizes the parent document and then each child document with Confluence.

        :param documents: Parent and child documents.
        :param ancestor_id: Confluence page ID under which the parent page is placed.
        :returns: Synchronized pages.
        :raises SynchronizationError: One or more child pages failed to synchronize.
        """

        parent_id = self.synchronizer.save_or_update(ancestor_id, documents.parent_content, page_title(documents.parent_name))
        result = PublishResult(parent_id)

        failures: dict[str, Exception] = {}
        for file_name, content in documents.children.items():
            title = page_title(file_name)
            try:
                result.children[title] = self.synchronizer.save_or_update(parent_id, content, title)
            except (ConfluenceError, PageError) as e:
                LOGGER.error("Failed to synchronize page %r: %s", title, e)
                failures[title] = e

        if failures:
            raise SynchronizationError(parent_id, failures)

        LOGGER.info("Synchronized parent page %s with %d child pages", parent_id, len(result.children))
        return result
