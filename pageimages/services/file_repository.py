# pageimages/services/file_repository.py
# Responsibility: Resolves file names to stored file records and their extended metadata.

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from pageimages.services.db import DBTransaction


class FileRecord(BaseModel):
    name: str
    width: int = 0
    height: int = 0
    raw_metadata: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class FileRepository(ABC):
    @abstractmethod
    def find_file(self, name: str) -> Optional[FileRecord]:
        pass

    @abstractmethod
    def extended_metadata(self, file: FileRecord) -> Dict[str, Dict[str, Any]]:
        """Returns metadata fields keyed by name, each shaped like {"value": ..., "source": ...}."""
        pass


class DatabaseFileRepository(FileRepository):
    """
    Reads uploaded file rows from the wiki's 'image' table.
    img_metadata holds the extended metadata fields as JSON.
    """

    def __init__(self, dsn: Optional[str] = None, transaction=DBTransaction):
        self.dsn = dsn
        self.transaction = transaction

    def find_file(self, name: str) -> Optional[FileRecord]:
        sql = "SELECT img_name, img_width, img_height, img_metadata FROM image WHERE img_name = %s"
        with self.transaction(self.dsn) as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (name,))
                row = cur.fetchone()

        if not row:
            return None

        img_name, width, height, metadata = row
        if isinstance(metadata, (bytes, memoryview)):
            metadata = bytes(metadata).decode('utf-8', errors='replace')
        return FileRecord(name=img_name, width=width or 0, height=height or 0, raw_metadata=metadata)

    def extended_metadata(self, file: FileRecord) -> Dict[str, Dict[str, Any]]:
        if not file.raw_metadata:
            return {}

        try:
            decoded = json.loads(file.raw_metadata)
        except json.JSONDecodeError as e:
            print(f"[FileRepository] Unreadable metadata for {file.name}: {e}")
            return {}

        if not isinstance(decoded, dict):
            return {}

        # Plain "field": value pairs are wrapped so callers can always read ['value'].
        return {
            field: entry if isinstance(entry, dict) else {"value": entry}
            for field, entry in decoded.items()
        }
