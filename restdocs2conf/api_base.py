"""
Publish generated API documentation to Confluence wiki.

Copyright 2022-2026, Levente Hunyadi
"""

from abc import ABC, abstractmethod

from .api_types import ConfluenceNewPage, ConfluencePage, ConfluencePageSummary


class PageGateway(ABC):
    """
    Capability to look up, fetch, create and update Confluence pages.

    Operations raise `ConfluenceError` (or one of its subclasses) when an exchange with the remote side cannot be completed, when the remote side
    responds with an error, or when the response cannot be decoded.
    """

    @abstractmethod
    def find_page_by_title(self, title: str, space_key: str) -> ConfluencePageSummary | None:
        """
        Looks up a Confluence page by title in a space.

        :param title: The page title. Pages in the same Confluence space must have a unique title.
        :param space_key: The Confluence space key.
        :returns: A summary of the first matching page without body and version, or `None` if no page matches.
        """
        ...

    @abstractmethod
    def get_page(self, page_id: str) -> ConfluencePage | None:
        """
        Retrieves Confluence wiki page details and content.

        :param page_id: The Confluence page ID.
        :returns: The current page with body and version, or `None` if no page exists with the ID.
        """
        ...

    @abstractmethod
    def create_page(self, page: ConfluenceNewPage) -> str:
        """
        Creates a new page.

        :param page: Page data with no identifier.
        :returns: Confluence page ID assigned to the new page.
        """
        ...

    @abstractmethod
    def update_page(self, page: ConfluencePage) -> str:
        """
        Saves a new version of an existing page.

        :param page: Page data with an existing identifier and an incremented version number.
        :returns: Confluence page ID of the updated page.
        """
        ...
