"""
Local Document Storage

Persists crawled documents as one JSON file per URL.
"""

import json
import logging
import os
from pathlib import Path
from typing import Iterator, Protocol

from webcrawl.models.document import Document

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Storage directory or document file could not be written."""


class StorageSink(Protocol):
    def save(self, doc: Document) -> None: ...


def storage_key(url: str) -> str:
    """Filesystem-safe key for a URL (path separators and colons replaced)."""
    return url.replace("/", "_").replace(":", "_")


class LocalStorage:
    """
    Directory of JSON documents.

    The directory is created on construction; failing to create it is a
    startup error.
    """

    def __init__(self, directory: str | os.PathLike):
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"could not create directory {self.directory}: {e}") from e

    def path_for(self, url: str) -> Path:
        return self.directory / f"{storage_key(url)}.json"

    def save(self, doc: Document) -> None:
        """
        Write the document to <directory>/<key>.json, replacing any older copy.

        Raises:
            StorageError: the file could not be written
        """
        path = self.path_for(doc.url)
        data = json.dumps(doc.to_dict(), ensure_ascii=False, indent=2)
        try:
            path.write_text(data, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"error writing file {path}: {e}") from e
        logger.debug(f"Saved document: {doc.url} -> {path.name}")

    def iter_documents(self) -> Iterator[Document]:
        """Yield every readable document; unreadable files are logged and skipped."""
        for path in sorted(self.directory.glob("*.json")):
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                yield Document(
                    url=str(raw["url"]),
                    title=str(raw.get("title", "")),
                    body=str(raw.get("body", "")),
                )
            except (OSError, ValueError, KeyError, TypeError) as e:
                logger.warning(f"Error reading document file {path}: {e}")
