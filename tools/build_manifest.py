from __future__ import annotations

import argparse
import logging
from typing import List

from chunkmanifest.build.compilation import CompilationResult, load_stats
from chunkmanifest.errors import ManifestConfigError
from chunkmanifest.manifest.builder import Manifest, ManifestBuilder, ManifestOptions
from chunkmanifest.utils.config import AppConfig


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a chunk manifest from bundler stats files")
    parser.add_argument("--stats", required=True, action="append", help="stats JSON file; repeat to merge builds")
    parser.add_argument("--config", required=False, action="append", default=[])
    parser.add_argument("--output", required=False, help="output directory, defaults to each stats outputPath")
    parser.add_argument("--base-path", required=False)
    parser.add_argument("--public-path", required=False)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace) -> ManifestOptions:
    cfg = AppConfig.from_files(*args.config) if args.config else AppConfig(raw={})
    options = ManifestOptions.from_config(cfg.raw)
    if args.base_path is not None:
        options.base_path = args.base_path
    if args.public_path is not None:
        options.public_path = args.public_path
    return options


def run(args: argparse.Namespace) -> Manifest:
    options = build_options(args)
    builder = ManifestBuilder(options)
    manifest = None
    for stats_path in args.stats:
        result = CompilationResult.from_stats(load_stats(stats_path), output_path=args.output)
        logging.debug("Loaded %s: %d chunks, hash=%s", stats_path, len(result.chunks), result.hash or "-")
        manifest = builder.on_compilation_done(result)
    assert manifest is not None
    logging.debug("Cache holds %d keys after %d compilations", len(options.cache), len(args.stats))
    return manifest


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    try:
        manifest = run(args)
    except ManifestConfigError as exc:
        raise SystemExit(f"Invalid manifest config: {exc}") from exc
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Could not build manifest: {exc}") from exc

    print(f"Wrote manifest with {len(manifest.assets_by_chunk_name)} entries ({len(manifest.errors)} errors)")


if __name__ == "__main__":
    main()
