"""
Publish generated API documentation to Confluence wiki.

Copyright 2022-2026, Levente Hunyadi
"""

import dataclasses
import enum
from dataclasses import dataclass, field


@enum.unique
class ConfluenceRepresentation(enum.Enum):
    STORAGE = "storage"
    ATLAS = "atlas_doc_format"
    WIKI = "wiki"


@enum.unique
class ConfluenceStatus(enum.Enum):
    CURRENT = "current"
    DRAFT = "draft"
    ARCHIVED = "archived"
    TRASHED = "trashed"
    HISTORICAL = "historical"


@enum.unique
class ConfluenceContentType(enum.Enum):
    PAGE = "page"
    BLOGPOST = "blogpost"


@dataclass(frozen=True)
class ConfluenceContentVersion:
    """
    Version information for a piece of Confluence content.

    :param number: Version number, starting at 1. Confluence accepts an update only if the number is one greater than the current version.
    :param minorEdit: Whether watchers are to be notified of the change.
    :param message: Version message.
    """

    number: int
    minorEdit: bool = False
    message: str | None = None

    def next(self) -> "ConfluenceContentVersion":
        return ConfluenceContentVersion(number=self.number + 1, minorEdit=self.minorEdit)


@dataclass(frozen=True)
class ConfluenceSpace:
    key: str


@dataclass(frozen=True)
class ConfluencePageRef:
    id: str


@dataclass(frozen=True)
class ConfluencePageStorage:
    """
    Holds Confluence page content.

    :param representation: Type of content representation used (e.g. Confluence Storage Format).
    :param value: Body of the content, in the format found in the representation field.
    """

    value: str
    representation: ConfluenceRepresentation = ConfluenceRepresentation.STORAGE


@dataclass(frozen=True)
class ConfluencePageBody:
    """
    Holds Confluence page content.

    :param storage: Encapsulates content with meta-information about its representation.
    """

    storage: ConfluencePageStorage

    @staticmethod
    def from_storage(content: str) -> "ConfluencePageBody":
        return ConfluencePageBody(storage=ConfluencePageStorage(value=content, representation=ConfluenceRepresentation.STORAGE))


@dataclass(frozen=True)
class ConfluencePageSummary:
    """
    Holds the partial projection of a Confluence page returned by a search.

    Lacks body and version; fetch the page by ID to obtain them.

    :param id: Confluence page ID.
    :param type: Content type.
    :param status: Page status.
    :param title: Page title.
    """

    id: str
    type: ConfluenceContentType
    status: ConfluenceStatus
    title: str


@dataclass(frozen=True)
class ConfluencePageSearchResult:
    results: list[ConfluencePageSummary]


@dataclass(frozen=True)
class ConfluenceNewPage:
    """
    Holds data for a Confluence page that is yet to be created.

    :param type: Content type.
    :param title: Page title. Needs to be unique within a space.
    :param space: Space the page is created in.
    :param body: Page content.
    :param ancestors: Parent page the page is created under.
    :param version: Initial page version.
    """

    type: ConfluenceContentType
    title: str
    space: ConfluenceSpace
    body: ConfluencePageBody
    ancestors: list[ConfluencePageRef]
    version: ConfluenceContentVersion

    @property
    def content(self) -> str:
        return self.body.storage.value


def create_storage_page(*, title: str, content: str, space_key: str, ancestor_id: str) -> ConfluenceNewPage:
    """
    Creates a new page value with content in Confluence Storage Format, placed under a single parent.

    :param title: Page title.
    :param content: Page content in Confluence Storage Format.
    :param space_key: Confluence space key.
    :param ancestor_id: Confluence page ID of the parent page.
    """

    return ConfluenceNewPage(
        type=ConfluenceContentType.PAGE,
        title=title,
        space=ConfluenceSpace(key=space_key),
        body=ConfluencePageBody.from_storage(content),
        ancestors=[ConfluencePageRef(id=ancestor_id)],
        version=ConfluenceContentVersion(number=1),
    )


@dataclass(frozen=True)
class ConfluencePage:
    """
    Holds Confluence page data used for page synchronization.

    :param id: Confluence page ID.
    :param type: Content type.
    :param status: Page status.
    :param title: Page title.
    :param space: Space the page belongs to.
    :param body: Page content.
    :param version: Page version. Incremented when the page is updated.
    :param ancestors: Ancestor pages, from the space root down to the immediate parent.
    """

    id: str
    type: ConfluenceContentType
    status: ConfluenceStatus
    title: str
    space: ConfluenceSpace
    body: ConfluencePageBody
    version: ConfluenceContentVersion
    ancestors: list[ConfluencePageRef] = field(default_factory=list)

    @property
    def content(self) -> str:
        return self.body.storage.value

    @property
    def parent_id(self) -> str | None:
        return self.ancestors[-1].id if self.ancestors else None

    def with_content(self, content: str) -> "ConfluencePage":
        """
        Produces the next version of this page with new content.

        The version number is incremented by exactly one; all other properties are retained.
        """

        return dataclasses.replace(self, body=ConfluencePageBody.from_storage(content), version=self.version.next())


@dataclass(frozen=True)
class ConfluenceUpdatePageRequest:
    id: str
    type: ConfluenceContentType
    title: str
    space: ConfluenceSpace
    body: ConfluencePageBody
    version: ConfluenceContentVersion
    ancestors: list[ConfluencePageRef]


@dataclass(frozen=True)
class ConfluencePageIdentity:
    "Captures the identifier in a create or update response."

    id: str
