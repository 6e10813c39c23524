"""
Publish generated API documentation to Confluence wiki.

Copyright 2022-2026, Levente Hunyadi
"""

import enum
import logging
from dataclasses import dataclass

from .api_base import PageGateway
from .api_types import ConfluencePage, create_storage_page
from .environment import PageError

LOGGER = logging.getLogger(__name__)


@enum.unique
class SynchronizationAction(enum.Enum):
    "Remote mutation performed to make a Confluence page match local content."

    CREATE = "create"
    NONE = "none"
    UPDATE = "update"


@dataclass(frozen=True)
class SynchronizationResult:
    """
    Outcome of synchronizing a single page.

    :param page_id: Confluence page ID of the synchronized page.
    :param action: Remote mutation that has been carried out.
    """

    page_id: str
    action: SynchronizationAction


def is_content_changed(page: ConfluencePage, content: str) -> bool:
    "True if the page body differs from the given content by exact string comparison."

    return page.content != content


class PageSynchronizer:
    """
    Makes sure a Confluence page with a given title exists in a space and has the expected content.

    Issues at most one remote mutation per call: a page is created if absent, updated if its content differs, and left untouched otherwise.
    """

    gateway: PageGateway
    space_key: str

    def __init__(self, gateway: PageGateway, space_key: str) -> None:
        """
        :param gateway: Capability to look up and persist Confluence pages.
        :param space_key: Confluence space key the pages belong to.
        """

        self.gateway = gateway
        self.space_key = space_key

    def synchronize(self, ancestor_id: str, content: str, title: str) -> SynchronizationResult:
        """
        Creates or updates a Confluence page such that its content matches the given content.

        :param ancestor_id: Confluence page ID of the parent, used only when the page is created.
        :param content: Page content in Confluence Storage Format.
        :param title: Page title, which identifies the page within the space.
        :returns: Page ID and the remote mutation carried out.
        """

        summary = self.gateway.find_page_by_title(title, self.space_key)
        if summary is None:
            page_id = self.gateway.create_page(
                create_storage_page(title=title, content=content, space_key=self.space_key, ancestor_id=ancestor_id)
            )
            LOGGER.info("Created page %r with ID: %s", title, page_id)
            return SynchronizationResult(page_id, SynchronizationAction.CREATE)

        # search results lack body and version
        page = self.gateway.get_page(summary.id)
        if page is None:
            raise PageError(f"page {summary.id} with title {title!r} found by search but no longer exists")

        if not is_content_changed(page, content):
            LOGGER.info("Up-to-date page %r with ID: %s", title, page.id)
            return SynchronizationResult(page.id, SynchronizationAction.NONE)

        page_id = self.gateway.update_page(page.with_content(content))
        LOGGER.info("Updated page %r with ID: %s", title, page_id)
        return SynchronizationResult(page_id, SynchronizationAction.UPDATE)

    def save_or_update(self, ancestor_id: str, content: str, title: str) -> str:
        """
        Creates or updates a Confluence page such that its content matches the given content.

        :returns: Confluence page ID.
        """

        return self.synchronize(ancestor_id, content, title).page_id
