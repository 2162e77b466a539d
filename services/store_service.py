# ================================================================
# services/store_service.py — Submission store adapters
# ================================================================
"""
Append-only storage for build records.

Two interchangeable backends share one contract:

* ``FileBuildStore`` keeps every dynamic record in a JSON document
  ``{"builds": [...]}`` and rewrites the whole document on each append.
* ``KVBuildStore`` keeps the dynamic records as a JSON array under a single
  key of a SQL-backed key-value table.

Both expose the static seed set separately (it is never rewritten) and number
new records after the highest id found across seed and dynamic records.

``append`` is serialized by a per-store lock, which removes lost updates
between requests served by the same process. Several processes sharing one
file or key still race on the read-modify-write; the last write wins.
"""
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from pydantic import ValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from core.catalog import TAG_VOCABULARY
from core.config import settings
from core.database import create_db_and_tables, engine as default_engine
from core.exceptions import StoreReadError, StoreWriteError, UnknownTagError
from models.models import KVEntry, utc_now
from schemas.build_schema import BuildCreate, BuildRecord

logger = logging.getLogger(__name__)

ID_MIN_WIDTH = 3


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def next_build_id(records: Iterable[BuildRecord]) -> str:
    """``max(numeric ids) + 1``, zero-padded to at least three digits."""
    numeric = [int(r.id) for r in records if r.id.isascii() and r.id.isdigit()]
    highest = max(numeric, default=0)
    return str(highest + 1).zfill(ID_MIN_WIDTH)


def parse_records(items, source: str) -> List[BuildRecord]:
    if not isinstance(items, list):
        raise StoreReadError(f"{source}: expected a list of builds")
    try:
        return [BuildRecord.model_validate(item) for item in items]
    except ValidationError as e:
        raise StoreReadError(f"{source}: corrupt build record ({e.error_count()} errors)") from e


def load_seed_records(path: Optional[str]) -> List[BuildRecord]:
    """Read the static seed set; a missing seed file means no seed set."""
    if not path:
        return []
    seed_path = Path(path)
    if not seed_path.exists():
        logger.warning(f"⚠️ Seed file {seed_path} not found — continuing without seed builds.")
        return []
    try:
        document = json.loads(seed_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise StoreReadError(f"Could not read seed file {seed_path}: {e}") from e
    if not isinstance(document, dict):
        raise StoreReadError(f"{seed_path}: expected an object with a 'builds' list")
    return parse_records(document.get("builds"), str(seed_path))


# ================================================================
#  ✅ Contract
# ================================================================
class BuildStore(ABC):
    def __init__(
        self,
        seed_records: Sequence[BuildRecord] = (),
        today: Callable[[], date] = utc_today,
    ):
        self.seed_records: List[BuildRecord] = list(seed_records)
        self._today = today
        self._lock = threading.Lock()

    @abstractmethod
    def _load(self) -> List[BuildRecord]:
        ...

    @abstractmethod
    def _save(self, records: List[BuildRecord]) -> None:
        ...

    def initialize(self) -> None:
        """Prepare the backing store so that the first read succeeds."""

    def read_all(self) -> List[BuildRecord]:
        """Every persisted (dynamic) record, in storage order."""
        return self._load()

    def append(self, build: BuildCreate) -> BuildRecord:
        """Assign the next id and today's date, persist, and return the stored record."""
        for tag in build.tags:
            if tag not in TAG_VOCABULARY:
                raise UnknownTagError(tag)

        with self._lock:
            records = self._load()
            record = BuildRecord(
                id=next_build_id([*records, *self.seed_records]),
                submitted_at=self._today(),
                featured=False,
                **build.model_dump(),
            )
            self._save(records + [record])

        logger.info(f"✅ Stored build {record.id} ({record.project_name!r})")
        return record


# ================================================================
#  ✅ Backend A: flat JSON file
# ================================================================
class FileBuildStore(BuildStore):
    def __init__(self, path, **kwargs):
        super().__init__(**kwargs)
        self.path = Path(path)

    def initialize(self) -> None:
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write_document([])
        except OSError as e:
            raise StoreWriteError(f"Could not create {self.path}: {e}") from e
        logger.info(f"✅ Created empty builds file at {self.path}")

    def _load(self) -> List[BuildRecord]:
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StoreReadError(f"Could not read {self.path}: {e}") from e
        if not isinstance(document, dict):
            raise StoreReadError(f"{self.path}: expected an object with a 'builds' list")
        return parse_records(document.get("builds"), str(self.path))

    def _save(self, records: List[BuildRecord]) -> None:
        try:
            self._write_document(records)
        except OSError as e:
            raise StoreWriteError(f"Could not write {self.path}: {e}") from e

    def _write_document(self, records: List[BuildRecord]) -> None:
        payload = json.dumps(
            {"builds": [r.to_document() for r in records]},
            indent=2,
            ensure_ascii=False,
        )
        # Readers see either the old or the new document, never a partial one
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".builds-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


# ================================================================
#  ✅ Backend B: key-value table
# ================================================================
class KVBuildStore(BuildStore):
    def __init__(self, engine: Engine, key: str, **kwargs):
        super().__init__(**kwargs)
        self.engine = engine
        self.key = key

    def initialize(self) -> None:
        try:
            create_db_and_tables(self.engine)
        except SQLAlchemyError as e:
            raise StoreWriteError(f"Could not prepare key-value store: {e}") from e

    def _load(self) -> List[BuildRecord]:
        try:
            with Session(self.engine) as session:
                entry = session.get(KVEntry, self.key)
                raw = entry.value if entry else None
        except SQLAlchemyError as e:
            raise StoreReadError(f"Key-value store unreachable: {e}") from e

        if raw is None:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreReadError(f"Key {self.key!r} holds invalid JSON: {e}") from e
        return parse_records(items, f"key {self.key!r}")

    def _save(self, records: List[BuildRecord]) -> None:
        value = json.dumps([r.to_document() for r in records], ensure_ascii=False)
        try:
            with Session(self.engine) as session:
                entry = session.get(KVEntry, self.key)
                if entry is None:
                    entry = KVEntry(key=self.key, value=value)
                else:
                    entry.value = value
                    entry.updated_at = utc_now()
                session.add(entry)
                session.commit()
        except SQLAlchemyError as e:
            raise StoreWriteError(f"Could not write key {self.key!r}: {e}") from e


# ================================================================
#  ✅ Dependency: configured store
# ================================================================
def build_store(backend: str, seed_records: Sequence[BuildRecord] = ()) -> BuildStore:
    if backend == "file":
        return FileBuildStore(settings.BUILDS_FILE, seed_records=seed_records)
    if backend == "kv":
        return KVBuildStore(default_engine, settings.KV_KEY, seed_records=seed_records)
    raise ValueError(f"Unknown store backend: {backend}")


@lru_cache(maxsize=1)
def get_store() -> BuildStore:
    """
    Process-wide store built from settings.
    Cached so that every request shares the same append lock.
    """
    return build_store(settings.STORE_BACKEND, load_seed_records(settings.SEED_FILE))
