import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)


class LocalStore:
    """
    Durable key/value state kept in one JSON file.

    Every write rewrites the whole file through a temp file and ``os.replace``
    so a crash never leaves a half-written state behind.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: dict[str, Any] = self._read()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable local state %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".state-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, default=str)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        self._data = data

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.update({key: value})

    def update(self, values: Mapping[str, Any]) -> None:
        data = dict(self._data)
        data.update(values)
        self._write(data)

    def delete(self, *keys: str) -> None:
        self.delete_many(keys)

    def delete_many(self, keys: Iterable[str]) -> None:
        keys = set(keys)
        data = {k: v for k, v in self._data.items() if k not in keys}
        self._write(data)

    def __contains__(self, key: str) -> bool:
        return key in self._data
