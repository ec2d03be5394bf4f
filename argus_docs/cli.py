from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import DocsConfig, load_docs_config
from .errors import ConfigError
from .logging import setup_logging
from .settings import load_settings
from .sync import SyncEngine, SyncStatus
from .validator import validate_tree

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="argus-docs: sync approved docs and validate the documentation tree",
    rich_markup_mode="rich",
)
console = Console(highlight=False, soft_wrap=True, emoji=False)


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def _out(line: str = "") -> None:
    """Print a report line verbatim (no rich markup in paths or messages)."""
    console.print(line, markup=False)


def _bootstrap(
    root: Optional[Path],
    config_path: Optional[Path],
    *,
    strict: Optional[bool] = None,
    links: Optional[bool] = None,
) -> tuple[Path, DocsConfig]:
    s = load_settings()
    docs_root = Path(root) if root is not None else Path(s.DOCS_ROOT)
    setup_logging(s)

    try:
        cfg = load_docs_config(config_path if config_path is not None else s.DOCS_CONFIG)
    except ConfigError as e:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=2)

    cfg = cfg.with_overrides(
        strict=s.DOCS_STRICT if strict is None else strict,
        check_links=s.DOCS_CHECK_LINKS if links is None else links,
    )
    return docs_root, cfg


# ═══════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═══════════════════════════════════════════════════════════════════════════════

@app.command("validate", help="[bold cyan]V[/bold cyan]alidate markdown under the docs roots")
@app.command("check", hidden=True)  # Alias
def validate(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Docs root (default: DOCS_ROOT)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file overriding the static tables"),
    lenient: bool = typer.Option(False, "--lenient", help="Only require `title` (overrides DOCS_STRICT)"),
    no_links: bool = typer.Option(False, "--no-links", help="Skip link and image syntax checks"),
    json_out: bool = typer.Option(False, "--json", help="Output the report as JSON"),
):
    """Check every doc for junk filenames, frontmatter and link syntax."""
    docs_root, cfg = _bootstrap(
        root,
        config,
        strict=False if lenient else None,
        links=False if no_links else None,
    )

    report = validate_tree(docs_root, cfg)

    if json_out:
        typer.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        for path, found in report.results.items():
            _out(f"\n❌ {path}:")
            for err in found:
                _out(f"   {err}")

        if report.ok:
            _out("\n✅ All docs validated")
        else:
            _out(f"\n❌ Validation failed: {report.total_errors} errors")

    if not report.ok:
        raise typer.Exit(code=1)


@app.command("sync", help="[bold cyan]S[/bold cyan]ync approved source docs into the docs tree")
def sync(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Docs root (default: DOCS_ROOT)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file overriding the static tables"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report what would be copied without writing"),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 if any source is missing or fails"),
):
    """Copy each approved source over its destination, skipping junk filenames."""
    docs_root, cfg = _bootstrap(root, config)

    report = SyncEngine(cfg, docs_root).run(dry_run=dry_run)

    for o in report.outcomes:
        if o.status is SyncStatus.SYNCED:
            _out(f"✅ Synced: {o.source} → {o.destination}")
        elif o.status is SyncStatus.BLOCKED:
            _out(f"❌ Blocked: {o.source}")
        elif o.status is SyncStatus.MISSING:
            _out(f"⚠️ Missing: {o.source}")
        else:
            _out(f"❌ Failed: {o.source} ({o.detail})")

    _out(f"\n{report.summary_line()}")
    if dry_run:
        console.print("[dim](dry run: nothing was written)[/dim]")

    if strict and (report.missing or report.failed):
        raise typer.Exit(code=1)


@app.command("status", help="Show approved sources and active validation settings")
def status(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Docs root (default: DOCS_ROOT)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file overriding the static tables"),
):
    """Show what sync would do and how validation is configured."""
    docs_root, cfg = _bootstrap(root, config)

    console.print(Panel.fit(
        "\n".join([
            f"[bold]Docs root:[/bold]        {escape(str(docs_root))}",
            f"[bold]Validation roots:[/bold] {escape(', '.join(sorted(cfg.validation_roots)))}",
            f"[bold]Root files:[/bold]       {escape(', '.join(sorted(cfg.root_files)))}",
            f"[bold]Required fields:[/bold]  {escape(', '.join(cfg.required_fields))}",
            f"[bold]Link checks:[/bold]      {cfg.check_links}",
            f"[bold]Blocked patterns:[/bold] {escape(', '.join(p.pattern for p in cfg.blocked_patterns))}",
        ]),
        title="[bold]Configuration[/bold]",
    ))

    t = Table(title="[bold]Approved Sources[/bold]")
    t.add_column("Source", style="bold")
    t.add_column("Destination", style="cyan")
    t.add_column("State", justify="right", no_wrap=True)
    for source, dest in cfg.sources.items():
        if cfg.is_junk(source):
            state = "[red]blocked[/red]"
        elif Path(source).is_file():
            state = "[green]ready[/green]"
        else:
            state = "[yellow]missing[/yellow]"
        t.add_row(escape(source), escape(dest), state)
    console.print(t)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
