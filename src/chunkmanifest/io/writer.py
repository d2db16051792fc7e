from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict


logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"


class ManifestWriter:
    def __init__(self, output_root: str, file_name: str = MANIFEST_FILENAME) -> None:
        self.output_root = Path(output_root)
        self.file_name = file_name

    @property
    def path(self) -> Path:
        return self.output_root / self.file_name

    def write(self, document: Dict[str, Any]) -> Path:
        self.output_root.mkdir(parents=True, exist_ok=True)
        # Replaces the previous manifest; write errors go to the caller.
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
        logger.debug("Wrote manifest with %d entries to %s", len(document.get("assetsByChunkName", {})), self.path)
        return self.path
