from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, MutableMapping, Optional, Union

from chunkmanifest.build.compilation import Chunk, CompilationResult
from chunkmanifest.io.writer import MANIFEST_FILENAME, ManifestWriter
from chunkmanifest.manifest.keys import base_key, derive_key, prefixed_key, published_path
from chunkmanifest.utils.config import AppConfig, option_str


logger = logging.getLogger(__name__)

CacheValue = Union[str, List[str]]


@dataclass
class ManifestOptions:
    base_path: str = ""
    public_path: Optional[str] = None
    cache: MutableMapping[str, CacheValue] = field(default_factory=dict)
    file_name: str = MANIFEST_FILENAME

    @classmethod
    def from_config(
        cls, raw: Dict[str, Any], cache: Optional[MutableMapping[str, CacheValue]] = None
    ) -> "ManifestOptions":
        section = AppConfig(raw=raw).manifest_section()
        options = cls(
            base_path=option_str(section, "basePath", "base_path") or "",
            public_path=option_str(section, "publicPath", "public_path"),
            file_name=option_str(section, "fileName", "file_name") or MANIFEST_FILENAME,
        )
        if cache is not None:
            options.cache = cache
        return options


@dataclass
class Manifest:
    assets_by_chunk_name: Dict[str, List[str]]
    errors: List[str] = field(default_factory=list)

    @classmethod
    def from_cache(cls, cache: MutableMapping[str, CacheValue], errors: List[str]) -> "Manifest":
        assets: Dict[str, List[str]] = {}
        for key, value in cache.items():
            assets[key] = [value] if isinstance(value, str) else list(value)
        return cls(assets_by_chunk_name=assets, errors=list(errors))

    def to_dict(self) -> Dict[str, Any]:
        assets: Dict[str, CacheValue] = {}
        for key, paths in self.assets_by_chunk_name.items():
            assets[key] = paths[0] if len(paths) == 1 else list(paths)
        return {"assetsByChunkName": assets, "errors": list(self.errors)}


class ManifestBuilder:
    """Publishes a finished compilation's chunk files into a manifest.

    All cross-compilation state lives in ``options.cache``; builders that share
    one cache object merge their entries, later compilations winning on equal
    keys.
    """

    def __init__(self, options: Optional[ManifestOptions] = None) -> None:
        self.options = options if options is not None else ManifestOptions()

    def on_compilation_done(self, result: CompilationResult) -> Manifest:
        public_path = self._resolve_public_path(result)
        entries: Dict[str, List[str]] = {}
        for chunk in result.chunks:
            self._collect_chunk(chunk, result, public_path, entries)

        cache = self.options.cache
        for key, paths in entries.items():
            cache[key] = paths[0] if len(paths) == 1 else list(paths)

        orphans = result.orphan_files()
        if orphans:
            logger.debug("Skipping %d files not attributed to any chunk: %s", len(orphans), ", ".join(orphans))

        manifest = Manifest.from_cache(cache, result.error_messages())
        writer = ManifestWriter(result.output_path, self.options.file_name)
        path = writer.write(manifest.to_dict())
        logger.info("Manifest %s: %d entries, %d errors", path, len(manifest.assets_by_chunk_name), len(manifest.errors))
        return manifest

    def _resolve_public_path(self, result: CompilationResult) -> str:
        if self.options.public_path is not None:
            return self.options.public_path
        return result.public_path or ""

    def _collect_chunk(
        self,
        chunk: Chunk,
        result: CompilationResult,
        public_path: str,
        entries: Dict[str, List[str]],
    ) -> None:
        if not chunk.files:
            return
        primary = chunk.files[0]
        chunk_key = base_key(chunk.name, chunk.id, chunk.files)
        for file in chunk.files:
            if result.assets and file not in result.assets:
                logger.debug("Chunk %r lists %s which was not emitted", chunk_key, file)
                continue
            key = prefixed_key(self.options.base_path, derive_key(primary, file, chunk_key))
            entries.setdefault(key, []).append(published_path(public_path, file))


def on_compilation_done(result: CompilationResult, options: Optional[ManifestOptions] = None) -> Manifest:
    return ManifestBuilder(options).on_compilation_done(result)
