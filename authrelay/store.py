import json
import os
import tempfile
import threading
from pathlib import Path

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from .errors import ConflictError, StorageError
from .models import UserRecord


# Re-reads the whole file on every call; fine for small user counts only.
class JsonCredentialStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def init(self):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"cannot create {self.path.parent}: {e}") from e
        logger.info(f"Credential store at {self.path}")

    def _read(self) -> list[UserRecord]:
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"cannot read {self.path}: {e}") from e
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("expected a JSON array of users")
            return [UserRecord.model_validate(row) for row in data]
        except (ValueError, PydanticValidationError) as e:
            raise StorageError(f"corrupt user file {self.path}: {e}") from e

    def _write(self, records: list[UserRecord]):
        payload = json.dumps([r.model_dump() for r in records], indent=2, ensure_ascii=False)
        try:
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".users-", suffix=".tmp")
        except OSError as e:
            raise StorageError(f"cannot write {self.path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp, self.path)
        except OSError as e:
            Path(tmp).unlink(missing_ok=True)
            raise StorageError(f"cannot write {self.path}: {e}") from e

    def list_records(self) -> list[UserRecord]:
        return self._read()

    def find_by_email(self, email: str) -> UserRecord | None:
        for record in self._read():
            if record.email == email:
                return record
        return None

    def append(self, record: UserRecord):
        with self._lock:
            records = self._read()
            if any(r.email == record.email for r in records):
                raise ConflictError()
            records.append(record)
            self._write(records)
