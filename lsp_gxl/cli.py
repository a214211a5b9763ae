"""Click CLI: run a language server over a project and write the symbol graph as GXL."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from lsp_gxl.exporter import GxlEncodingError
from lsp_gxl.models import GraphConfig
from lsp_gxl.pipeline import run_pipeline
from lsp_gxl.provider import ProviderError

_LOG_LEVELS = ["debug", "info", "warning", "error"]


@click.command(context_settings={"ignore_unknown_options": True})
@click.version_option(version="0.1.0")
@click.option("--root-path", "--rootPath", "root_path", required=True,
              type=click.Path(exists=True, file_okay=False, path_type=Path),
              help="Project root passed to the language server in the initialize message")
@click.option("--file-pattern", "--filePattern", "file_pattern",
              help="Glob pattern for files to collect symbols from (relative to the root path)")
@click.option("--ignore", "ignore", multiple=True, help="Glob pattern of files to ignore (repeatable)")
@click.option("--out-file", "--outFile", "out_file", required=True,
              type=click.Path(dir_okay=False, path_type=Path), help="Path of the GXL file to write")
@click.option("--no-references", "--noReferences", "no_references", is_flag=True,
              help="Only collect symbols and containment, do not query references")
@click.option("--no-open", "no_open", is_flag=True, help="Do not send didOpen before querying a file")
@click.option("--log-level", "--logLevel", "log_level", type=click.Choice(_LOG_LEVELS, case_sensitive=False),
              help="Log level (default: info, or $LSP_GXL_LOG_LEVEL)")
@click.argument("server_command", nargs=-1, type=click.UNPROCESSED)
def cli(
    root_path: Path,
    file_pattern: str | None,
    ignore: tuple[str, ...],
    out_file: Path,
    no_references: bool,
    no_open: bool,
    log_level: str | None,
    server_command: tuple[str, ...],
):
    """lsp2gxl: build a symbol dependency graph with a language server.

    \b
    Example:
      lsp2gxl --root-path ~/git/flask --file-pattern '**/*.py' --out-file flask.gxl pyls
    """
    if not server_command:
        raise click.UsageError("No language server command given")

    config = GraphConfig(
        root_path=root_path,
        file_pattern=file_pattern,
        ignore=list(ignore),
        out_file=out_file,
        server_command=list(server_command),
        include_references=not no_references,
        open_documents=not no_open,
        log_level=log_level or "",
    )
    if not config.file_pattern:
        raise click.UsageError("No file pattern provided")

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    def progress(stage: str, current: int, total: int):
        if current == total:
            click.echo(f"  {stage}: {current}/{total}")

    click.echo(f"Analyzing {config.root_path} with {' '.join(config.server_command)}")
    try:
        result = run_pipeline(config, progress=progress)
    except (ProviderError, GxlEncodingError) as e:
        raise click.ClickException(str(e))

    click.echo(
        f"\nWrote {result.node_count} node(s) and {result.edge_count} edge(s) to {result.out_file}"
    )
    if result.dangling:
        click.echo(click.style(f"{len(result.dangling)} dangling edge endpoint(s)", fg="yellow"))


if __name__ == "__main__":
    cli()
