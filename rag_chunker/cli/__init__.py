"""
Command-Line Interface

CLI commands for rag-chunker operations.

Commands:
    rag-chunker chunk   - Segment a Markdown file and report the chunks
    rag-chunker config  - Show the effective configuration or write it to TOML

Usage:
    # Hierarchical parents and children
    rag-chunker chunk guide.md

    # Multi-scale tiers as JSON
    rag-chunker chunk guide.md --strategy multi-scale --json

    # Larger sections
    rag-chunker chunk guide.md --profile extended

    # Write a starting config file
    rag-chunker config --output chunker.toml
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

__all__ = ["main", "app"]

STRATEGIES = ("hierarchical", "multi-scale", "sections")

app = typer.Typer(
    name="rag-chunker",
    help="Structure-aware Markdown chunking for retrieval-augmented generation",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def _setup() -> None:
    """Structure-aware Markdown chunking for retrieval-augmented generation."""
    load_dotenv()


def _load_config(config_file: Optional[Path], profile: Optional[str]):
    from rag_chunker.config import HIERARCHICAL_PROFILES, ChunkerConfig

    config = ChunkerConfig.from_file(config_file) if config_file else ChunkerConfig()
    if profile:
        if profile not in HIERARCHICAL_PROFILES:
            raise ValueError(
                f"Unknown profile: {profile} (expected one of {sorted(HIERARCHICAL_PROFILES)})"
            )
        config = config.with_overrides(**HIERARCHICAL_PROFILES[profile])
    return config


def _preview(text: str, width: int = 60) -> str:
    line = next((ln.strip() for ln in text.splitlines() if ln.strip()), "")
    return line if len(line) <= width else line[: width - 3] + "..."


def _print_stats(stats: dict[str, Any], title: str) -> None:
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    for key, value in stats.items():
        table.add_row(key, str(value))
    console.print(table)


@app.command()
def chunk(
    path: Path = typer.Argument(
        ...,
        help="Markdown file to segment",
        exists=True,
        dir_okay=False,
    ),
    strategy: str = typer.Option(
        "hierarchical",
        "--strategy", "-s",
        help="Chunking strategy: hierarchical, multi-scale or sections",
    ),
    profile: Optional[str] = typer.Option(
        None,
        "--profile", "-p",
        help="Hierarchical threshold profile (compact, extended)",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="TOML configuration file",
        exists=True,
        dir_okay=False,
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print chunks as JSON instead of a table",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Segment a Markdown file and report the chunks."""
    from rag_chunker.chunking import (
        chunk_statistics,
        segment_document,
        segment_multi_scale,
        segment_sections,
    )
    from rag_chunker.utils import utf8_len

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if strategy not in STRATEGIES:
        console.print(f"[red]Unknown strategy: {strategy}[/] (expected one of {', '.join(STRATEGIES)})")
        raise typer.Exit(code=1)

    try:
        config = _load_config(config_file, profile)
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/]")
        raise typer.Exit(code=1)

    try:
        text = path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        console.print(f"[red]Failed to read {path}: {e}[/]")
        raise typer.Exit(code=1)

    if strategy == "hierarchical":
        result = segment_document(text, config)
        if as_json:
            typer.echo(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))
            return

        table = Table(title=f"Parents: {path.name}")
        table.add_column("#", justify="right")
        table.add_column("Lines", style="cyan")
        table.add_column("Bytes", justify="right")
        table.add_column("Children", justify="right", style="green")
        table.add_column("Summary")
        for i, parent in enumerate(result.parents):
            table.add_row(
                str(i),
                f"{parent.start_line}-{parent.end_line}",
                str(utf8_len(parent.content)),
                str(len(parent.child_ids)),
                _preview(parent.summary),
            )
        console.print(table)
        _print_stats(chunk_statistics(result), "Statistics")
        return

    if strategy == "multi-scale":
        chunks = segment_multi_scale(text, config)
    else:
        chunks = segment_sections(text, config)

    if as_json:
        payload = [c.model_dump(mode="json") for c in chunks]
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    table = Table(title=f"Chunks ({strategy}): {path.name}")
    table.add_column("Tier", style="cyan")
    table.add_column("Lines")
    table.add_column("Bytes", justify="right")
    table.add_column("Code", justify="center")
    table.add_column("Preview")
    for c in chunks:
        table.add_row(
            c.chunk_size.value,
            f"{c.start_line}-{c.end_line}",
            str(utf8_len(c.content)),
            "yes" if c.has_code else "",
            _preview(c.content),
        )
    console.print(table)
    _print_stats(chunk_statistics(chunks), "Statistics")


@app.command()
def config(
    profile: Optional[str] = typer.Option(
        None,
        "--profile", "-p",
        help="Hierarchical threshold profile (compact, extended)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Write the configuration to this TOML file",
    ),
) -> None:
    """Show the effective configuration or write it to TOML."""
    try:
        settings = _load_config(None, profile)
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/]")
        raise typer.Exit(code=1)

    if output:
        settings.to_file(output)
        console.print(f"[green]Configuration written to {output}[/]")
        return

    table = Table(title="Configuration")
    table.add_column("Option", style="cyan")
    table.add_column("Value", style="green")
    for key, value in settings.to_dict().items():
        if key == "openai_api_key":
            value = "***" if value else None
        table.add_row(key, str(value))
    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()
