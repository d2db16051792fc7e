from __future__ import annotations

import os
from typing import Optional, Sequence

from chunkmanifest.build.compilation import ChunkId


def derive_key(primary_file: str, sibling_file: str, base_key: str) -> str:
    """Map an emitted file name to a readable manifest key.

    The primary file name is replaced by the chunk's base key wherever it first
    occurs in the sibling name, so ``one.3f2a.js.map`` of chunk ``one`` (primary
    ``one.3f2a.js``) becomes ``one.map``. When the primary name is not part of
    the sibling name, the sibling keeps its own bare name.
    """
    if primary_file and primary_file in sibling_file:
        return sibling_file.replace(primary_file, base_key, 1)
    return sibling_file


def base_key(name: Optional[str], chunk_id: Optional[ChunkId], files: Sequence[str]) -> str:
    if name:
        return name
    # Nameless chunks are keyed by their first file without its extension.
    if files:
        return os.path.splitext(files[0])[0]
    if chunk_id is not None:
        return str(chunk_id)
    return ""


def prefixed_key(base_path: str, key: str) -> str:
    return f"{base_path}{key}"


def published_path(public_path: str, file: str) -> str:
    return f"{public_path}{file}"
