"""
JSON document store.

The whole directory lives in one JSON file with two top‑level arrays,
``speakers`` and ``nominations``.  Every mutation is a full
``load`` -> modify -> ``save`` of that document.  There is no locking:
two overlapping read‑modify‑write cycles race and the last ``save``
wins.

Services only talk to the ``load``/``save`` pair, so the file can be
replaced by a transactional store without touching them.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from .config import settings
from .exceptions import ReadError, WriteError
from ..schemas.document import Document


def _dump(record: BaseModel) -> Dict[str, Any]:
    return record.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)


def get_database_path() -> str:
    """Compute the path to the JSON document.

    If ``settings.database_path`` is an absolute path, use it directly.
    Otherwise resolve it relative to the package root.
    """
    db_path = settings.database_path
    if os.path.isabs(db_path):
        return db_path
    base_dir = Path(__file__).resolve().parent.parent.parent  # speaker_directory_api/
    return str((base_dir / db_path).resolve())


class JsonDocumentStore:
    """Read and write the directory document as a single file."""

    def __init__(self, path: str) -> None:
        self.path = path

    def load(self) -> Document:
        """Read and validate the whole document.

        A missing or unreadable file, invalid JSON or a document of the
        wrong shape raises ``ReadError``.  The file is never created on
        read.
        """
        logger = logging.getLogger(__name__)
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                raw = fh.read()
        except OSError as e:
            logger.error("Failed to read database %s: %s", self.path, e)
            raise ReadError(f"Error reading database: {e}") from e
        try:
            return Document.model_validate_json(raw)
        except SchemaError as e:
            logger.error("Database %s is malformed: %s", self.path, e)
            raise ReadError("Error reading database: malformed document") from e

    def save(self, document: Document) -> None:
        """Overwrite the file with ``document``.

        Records are written with the fields they were loaded or built
        with, so a save never adds defaults to records it did not touch.
        """
        logger = logging.getLogger(__name__)
        data = {
            "speakers": [_dump(speaker) for speaker in document.speakers],
            "nominations": [_dump(nomination) for nomination in document.nominations],
        }
        try:
            with open(self.path, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error("Failed to write database %s: %s", self.path, e)
            raise WriteError(f"Error writing database: {e}") from e


def get_store(path: Optional[str] = None) -> JsonDocumentStore:
    """Return a store bound to ``path`` or the configured database."""
    return JsonDocumentStore(path or get_database_path())
