"""
Publish generated API documentation to Confluence wiki.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from .environment import DocumentError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentSet:
    """
    Documents to publish, read from a directory of generated documentation.

    :param parent_name: File name of the parent document.
    :param parent_content: Text of the parent document.
    :param children: Maps child file names to their text, in the order they are published.
    """

    parent_name: str
    parent_content: str
    children: dict[str, str] = field(default_factory=dict)


def read_document(path: Path) -> str:
    "Reads the text of a generated document."

    LOGGER.debug("Reading file: %s", path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"error reading file {path}: {e}") from e


def find_directory(directory: Path, name: str) -> Path | None:
    "Finds a sub-directory with case-insensitive name match."

    for entry in sorted(directory.iterdir()):
        if entry.is_dir() and entry.name.casefold() == name.casefold():
            return entry
    return None


class Scanner:
    def read(self, docs_dir: Path, *, index_file: str = "index.html", children_dir: str = "children") -> DocumentSet:
        """
        Reads the parent document and the child documents from a directory of generated documentation.

        :param docs_dir: Directory with generated documentation.
        :param index_file: Name of the parent document in the directory.
        :param children_dir: Name of the sub-directory that holds child documents.
        :returns: Contents of the parent and child documents.
        """

        parent_content = read_document(docs_dir / index_file)
        return DocumentSet(
            parent_name=index_file,
            parent_content=parent_content,
            children=self._read_children(docs_dir, children_dir),
        )

    def _read_children(self, docs_dir: Path, children_dir: str) -> dict[str, str]:
        directory = find_directory(docs_dir, children_dir)
        if directory is None:
            LOGGER.debug("No children directory %s in %s", children_dir, docs_dir)
            return {}

        paths = sorted(path for path in directory.iterdir() if path.is_file())
        if not paths:
            LOGGER.debug("No children in %s", directory)
            return {}

        LOGGER.debug("Found %d children in %s: %s", len(paths), directory, ", ".join(path.name for path in paths))

        children: dict[str, str] = {}
        errors: dict[str, DocumentError] = {}
        for path in paths:
            try:
                children[path.name] = read_document(path)
            except DocumentError as e:
                errors[path.name] = e

        if errors:
            raise DocumentError("; ".join(f"cannot read file [{name}]: {error}" for name, error in errors.items()))

        return children


def clean(directory: Path) -> None:
    """
    Removes a directory with all sub-directories and files recursively.

    :param directory: Directory to remove. A missing directory is ignored.
    """

    if not directory.exists():
        LOGGER.debug("Nothing to clean; directory does not exist: %s", directory)
        return
    if not directory.is_dir():
        raise DocumentError(f"expected: directory; got: {directory}")

    LOGGER.info("Removing directory: %s", directory)
    try:
        shutil.rmtree(directory)
    except OSError as e:
        raise DocumentError(f"error deleting directory {directory}: {e}") from e
