"""Write coverage artifacts to disk."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class JsonWriter(Protocol):
    def write_json_sync(self, path: str | os.PathLike, data: Any) -> None: ...


class JsonFileWriter:
    """Serialize data as JSON, creating parent directories as needed."""

    def __init__(self, indent: int | None = None):
        self.indent = indent

    def write_json_sync(self, path: str | os.PathLike, data: Any) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=self.indent)
        logger.debug(f"Wrote {path}")
