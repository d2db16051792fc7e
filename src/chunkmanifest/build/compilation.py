from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Union


ChunkId = Union[int, str]


@dataclass
class Chunk:
    id: Optional[ChunkId] = None
    name: Optional[str] = None
    files: List[str] = field(default_factory=list)


@dataclass
class CompilationResult:
    chunks: List[Chunk] = field(default_factory=list)
    assets: Set[str] = field(default_factory=set)
    hash: str = ""
    output_path: str = "."
    public_path: Optional[str] = None
    errors: List[Any] = field(default_factory=list)

    @classmethod
    def from_stats(cls, stats: Dict[str, Any], output_path: Optional[str] = None) -> "CompilationResult":
        """Build a result from a bundler stats document.

        Missing fields fall back to defaults. ``output_path`` overrides the
        document's own ``outputPath``.
        """
        chunks = [_chunk_from_stats(raw) for raw in stats.get("chunks") or []]
        assets = {_asset_name(raw) for raw in stats.get("assets") or []}
        assets.discard("")
        return cls(
            chunks=chunks,
            assets=assets,
            hash=str(stats.get("hash") or ""),
            output_path=output_path or stats.get("outputPath") or ".",
            public_path=stats.get("publicPath"),
            errors=list(stats.get("errors") or []),
        )

    def error_messages(self) -> List[str]:
        return [_error_message(err) for err in self.errors]

    def chunk_files(self) -> Set[str]:
        files: Set[str] = set()
        for chunk in self.chunks:
            files.update(chunk.files)
        return files

    def orphan_files(self) -> List[str]:
        return sorted(self.assets - self.chunk_files())


def load_stats(path: str | Path) -> Dict[str, Any]:
    """Load a stats JSON file into a dict."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _first(values: Iterable[Any]) -> Any:
    for value in values:
        if value:
            return value
    return None


def _chunk_from_stats(raw: Dict[str, Any]) -> Chunk:
    name = raw.get("name") or _first(raw.get("names") or [])
    files = raw.get("files") or []
    if isinstance(files, str):
        files = [files]
    return Chunk(id=raw.get("id"), name=name, files=[str(f) for f in files])


def _asset_name(raw: Any) -> str:
    if isinstance(raw, dict):
        return str(raw.get("name") or "")
    return str(raw)


def _error_message(err: Any) -> str:
    if isinstance(err, dict) and "message" in err:
        return str(err["message"])
    return str(err)
