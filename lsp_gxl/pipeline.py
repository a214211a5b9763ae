"""Two-phase pipeline: collect symbols and references for every file, then resolve and export."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable

from lsp_gxl.exporter import write_gxl
from lsp_gxl.graph import AnchorPolicy, GraphModel, ReferenceTable, SymbolGraphBuilder, SymbolStore
from lsp_gxl.graph.graph_models import relative_path
from lsp_gxl.models import ExportResult, GraphConfig
from lsp_gxl.provider import BaseProvider, LspProvider, discover_files, is_ignored

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


@dataclass
class Collection:
    """Everything phase 1 gathered; complete before any reference is resolved."""
    store: SymbolStore
    references: ReferenceTable = field(default_factory=ReferenceTable)
    skipped_imports: int = 0


def anchor_policy(config: GraphConfig) -> AnchorPolicy:
    overrides = {}
    if config.import_pattern is not None:
        overrides["import_pattern"] = config.import_pattern
    if config.declaration_keywords is not None:
        overrides["declaration_keywords"] = tuple(config.declaration_keywords)
    return AnchorPolicy(**overrides)


def _read_lines(file_id: Path) -> list[str]:
    try:
        return file_id.read_text(encoding="utf-8", errors="replace").split("\n")
    except OSError as e:
        logger.warning("Could not read %s: %s", file_id, e)
        return []


def collect(
    provider: BaseProvider,
    files: list[Path],
    config: GraphConfig,
    progress: ProgressCallback | None = None,
) -> Collection:
    """Phase 1: query symbols (and references) for every file, one request at a time."""
    collection = Collection(store=SymbolStore(config.root_path))
    store = collection.store
    policy = anchor_policy(config)

    for i, file_id in enumerate(files):
        if progress:
            progress("Collecting", i, len(files))
        rel = relative_path(file_id, config.root_path)
        logger.info("Getting symbols for %s", rel)
        symbols = list(store.put(file_id, provider.get_symbols(file_id)))
        store.ensure_ancestor_chain(file_id)

        if not config.include_references:
            logger.debug("%s: skipping references", rel)
        elif symbols:
            lines = _read_lines(file_id)
            for symbol in symbols:
                position = policy.anchor_for(symbol, lines)
                if position is None:
                    # import bindings are not declarations of interest
                    collection.skipped_imports += 1
                    continue
                locations = provider.get_references(file_id, position)
                logger.debug("%s: %d reference(s) to %s", rel, len(locations), symbol.name)
                collection.references.record(symbol, locations)

        store.add_file_symbol(file_id)

    if progress:
        progress("Collecting", len(files), len(files))
    return collection


def resolve(collection: Collection, config: GraphConfig) -> GraphModel:
    """Phase 2: containment and reference edges over the completed store, then validation."""
    builder = SymbolGraphBuilder(
        is_ignored=partial(is_ignored, root_path=config.root_path, patterns=config.ignore),
    )
    references = collection.references if config.include_references else None
    graph = builder.build(collection.store, references)
    dangling = graph.validate()
    if dangling:
        logger.warning("%d dangling edge endpoint(s)", len(dangling))
    return graph


def build_graph(
    provider: BaseProvider,
    config: GraphConfig,
    progress: ProgressCallback | None = None,
) -> GraphModel:
    """Discover files, collect everything, then resolve the graph."""
    if not config.file_pattern:
        raise ValueError("No file pattern provided")
    files = discover_files(config.root_path, config.file_pattern, config.ignore)
    logger.info("Found %d file(s) matching %s", len(files), config.file_pattern)
    collection = collect(provider, files, config, progress)
    if progress:
        progress("Resolving", 0, 1)
    graph = resolve(collection, config)
    if progress:
        progress("Resolving", 1, 1)
    return graph


def run_pipeline(
    config: GraphConfig,
    provider: BaseProvider | None = None,
    progress: ProgressCallback | None = None,
) -> ExportResult:
    """Build the graph and write it to ``config.out_file``."""
    owned = provider is None
    if provider is None:
        provider = LspProvider(
            config.server_command, config.root_path, open_documents=config.open_documents,
        )
    try:
        graph = build_graph(provider, config, progress)
    finally:
        if owned:
            provider.close()

    if progress:
        progress("Exporting", 0, 1)
    out_file = write_gxl(graph, config.out_file)
    if progress:
        progress("Exporting", 1, 1)

    return ExportResult(
        out_file=out_file,
        node_count=len(graph.nodes),
        edge_count=len(graph.edges),
        dangling=list(graph.dangling),
    )
