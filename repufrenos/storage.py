"""
Per-client key-value store.

Each client (one browser profile, identified by the ``X-Client-Id``
header) owns a flat mapping of string keys to JSON-encoded string values.
The vehicle tracker and the cart keep their state here.
"""
import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import Header

from repufrenos.config import get_settings
from repufrenos.log import get_logger

logger = get_logger(__name__)

_CLIENT_ID_PATTERN = re.compile(r"[^A-Za-z0-9_-]")


class ClientStore:
    """Base store: subclasses provide raw string access."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> List[str]:
        raise NotImplementedError

    def get_json(self, key: str, default: Any = None) -> Any:
        """
        Decode ``key``. A missing or unreadable value is replaced by
        ``default``, which is written back and returned.
        """
        raw = self.get_item(key)
        if raw is not None:
            try:
                return json.loads(raw)
            except ValueError:
                logger.error("Error reading store key %r, resetting to default", key)
        self.set_json(key, default)
        return default

    def peek_json(self, key: str, default: Any = None) -> Any:
        """Like ``get_json`` but never writes."""
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            return default

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value, ensure_ascii=False))

    def clear_prefix(self, *prefixes: str) -> int:
        """Remove every key starting with one of ``prefixes``."""
        removed = [key for key in self.keys() if key.startswith(prefixes)]
        for key in removed:
            self.remove_item(key)
        return len(removed)


class MemoryStore(ClientStore):
    """Store kept in a dict. Used in tests and for throwaway clients."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._items)


class JsonFileStore(ClientStore):
    """Store persisted as one JSON document per client."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._items: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except ValueError:
            logger.error("Store file %s is corrupt, starting empty", self.path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        with open(tmp, "w", encoding="utf-8") as fh:
            json.dump(self._items, fh, ensure_ascii=False, indent=2)
        tmp.replace(self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._flush()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._flush()

    def keys(self) -> List[str]:
        return list(self._items)


def client_store_path(client_id: str, storage_dir: Optional[str] = None) -> Path:
    safe_id = _CLIENT_ID_PATTERN.sub("_", client_id)[:64] or "default"
    return Path(storage_dir or get_settings().storage_dir) / f"{safe_id}.json"


def get_store(x_client_id: str = Header(default="default")) -> ClientStore:
    """FastAPI dependency: the calling client's store."""
    return JsonFileStore(client_store_path(x_client_id))
