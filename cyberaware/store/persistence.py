"""
Persistence Bridge

The roster of registered profiles lives in ONE serialized blob (a JSON
array) under a fixed key of a flat key-value store. The whole roster is
rewritten on every save.

Failures never propagate: a missing, unreadable or corrupt blob loads as
an empty roster, and a failed write is dropped. Both are logged and
counted.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from pydantic import ValidationError as PydanticValidationError

from cyberaware.config import STORAGE_KEY
from cyberaware.exceptions import StorageError, StorageReadError, wrap_storage_exception
from cyberaware.models.profile import Profile
from cyberaware.observability.metrics import record_roster_save, record_storage_error

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Minimal local-storage style interface"""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemoryStorage:
    """Process-local storage, handy for guests-only sessions and tests"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """
    Key-value storage backed by a single JSON object on disk

    Writes go to a temporary file that replaces the original, so a crash
    mid-write leaves the previous contents intact.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise wrap_storage_exception(e, operation="read", key=str(self.path))
        if not isinstance(data, dict):
            raise wrap_storage_exception(
                TypeError(f"expected a JSON object, got {type(data).__name__}"),
                operation="read",
                key=str(self.path),
            )
        return data

    def _write_all(self, items: Dict[str, str]) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(items, tmp)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            raise wrap_storage_exception(e, operation="write", key=str(self.path))
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError as e:
                    logger.warning(f"Could not remove temp file {tmp_name}: {e}")

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            items = self._read_all()
        except StorageReadError:
            logger.warning(f"Overwriting unreadable storage file {self.path}")
            items = {}
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)


def serialize_roster(roster: Sequence[Profile]) -> str:
    """JSON array of profiles, dates as ISO-8601 strings"""
    return json.dumps([profile.model_dump(mode="json") for profile in roster])


def deserialize_roster(raw: str) -> List[Profile]:
    """
    Parse a serialized roster

    Raises:
        ValueError: not JSON, not an array, or a record is invalid
    """
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"Roster must be a JSON array, got {type(data).__name__}")
    profiles = [Profile.model_validate(item) for item in data]
    return [profile for profile in profiles if not profile.is_guest]


def load_registered_users(storage: KeyValueStorage, key: str = STORAGE_KEY) -> List[Profile]:
    """
    Rehydrate the roster, treating any failure as "no profiles yet"
    """
    try:
        raw = storage.get_item(key)
        if raw is None:
            logger.info(f"No stored roster under '{key}', starting empty")
            return []
        roster = deserialize_roster(raw)
    except StorageError:
        record_storage_error("read")
        return []
    except (ValueError, TypeError, PydanticValidationError) as e:
        logger.warning(f"Stored roster under '{key}' is corrupt, starting empty: {e}")
        record_storage_error("read")
        return []

    logger.info(f"Loaded {len(roster)} registered profiles from '{key}'")
    return roster


def save_registered_users(storage: KeyValueStorage, roster: Sequence[Profile], key: str = STORAGE_KEY) -> bool:
    """
    Write the whole roster back

    Returns:
        True if the write succeeded; failures are swallowed
    """
    try:
        storage.set_item(key, serialize_roster(roster))
    except StorageError:
        record_storage_error("write")
        return False
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not serialize roster for '{key}': {e}")
        record_storage_error("write")
        return False

    record_roster_save()
    logger.debug(f"Saved {len(roster)} registered profiles to '{key}'")
    return True


def clear_registered_users(storage: KeyValueStorage, key: str = STORAGE_KEY) -> bool:
    try:
        storage.remove_item(key)
    except StorageError:
        record_storage_error("write")
        return False
    return True
