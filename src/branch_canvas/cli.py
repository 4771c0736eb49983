"""branch-canvas CLI entry point using Click.

Commands:
    branch-canvas layout SNAPSHOT [--config FILE] [--orientation rows|columns] [--format table|yaml]
    branch-canvas render SNAPSHOT [-o FILE] [--selected BRANCH]
    branch-canvas diff OLD NEW
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
import yaml

from branch_canvas.api import layout_snapshot
from branch_canvas.config import AxisOrientation, ConfigError, LayoutConfig, load_config
from branch_canvas.diff import DiffKind, compute_line_diff, diff_stats, format_diff
from branch_canvas.layout import LayoutResult
from branch_canvas.renderers.svg import SvgRenderer
from branch_canvas.snapshot import SnapshotError, load_snapshot

_EXISTING_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


def _load(snapshot_path: Path, config_path: Path | None, orientation: str | None) -> LayoutResult:
    try:
        config = load_config(config_path) if config_path else LayoutConfig()
        if orientation:
            config = config.with_orientation(orientation)
        snapshot = load_snapshot(snapshot_path)
    except (ConfigError, SnapshotError) as exc:
        raise click.ClickException(str(exc)) from exc
    return layout_snapshot(snapshot, config)


def _as_rows(result: LayoutResult) -> list[dict]:
    return [
        {
            "id": n.id,
            "depth": n.depth,
            "cross": n.cross_index,
            "x": n.x,
            "y": n.y,
            "tentative": n.is_tentative,
        }
        for n in result.nodes
    ]


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log layout decisions to stderr.")
def main(verbose: bool) -> None:
    """branch-canvas — lay out and preview a branch/task graph."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ──────────────────────────────────────────────────────────────
# branch-canvas layout
# ──────────────────────────────────────────────────────────────

_common_options = [
    click.option("--config", "config_path", type=_EXISTING_FILE, default=None, help="YAML layout config."),
    click.option(
        "--orientation",
        type=click.Choice([o.value for o in AxisOrientation]),
        default=None,
        help="Override the config's axis orientation.",
    ),
]


def _with_common(fn):
    for option in reversed(_common_options):
        fn = option(fn)
    return fn


@main.command()
@click.argument("snapshot", type=_EXISTING_FILE)
@_with_common
@click.option("--format", "fmt", type=click.Choice(["table", "yaml"]), default="table")
def layout(snapshot: Path, config_path: Path | None, orientation: str | None, fmt: str) -> None:
    """Print the computed position of every node."""
    result = _load(snapshot, config_path, orientation)
    rows = _as_rows(result)
    if fmt == "yaml":
        click.echo(
            yaml.safe_dump(
                {"canvas": {"width": result.canvas_width, "height": result.canvas_height}, "nodes": rows},
                sort_keys=False,
            ),
            nl=False,
        )
        return

    width = max((len(r["id"]) for r in rows), default=2)
    click.echo(f"{'ID':<{width}}  DEPTH  CROSS      X       Y")
    for r in rows:
        marker = " *" if r["tentative"] else ""
        click.echo(f"{r['id']:<{width}}  {r['depth']:>5}  {r['cross']:>5g}  {r['x']:>5g}  {r['y']:>6g}{marker}")
    click.echo(f"canvas {result.canvas_width:g}x{result.canvas_height:g}")


# ──────────────────────────────────────────────────────────────
# branch-canvas render
# ──────────────────────────────────────────────────────────────


@main.command()
@click.argument("snapshot", type=_EXISTING_FILE)
@_with_common
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--selected", default=None, help="Branch to highlight.")
def render(
    snapshot: Path,
    config_path: Path | None,
    orientation: str | None,
    output: Path | None,
    selected: str | None,
) -> None:
    """Render the snapshot as SVG (stdout unless --output is given)."""
    result = _load(snapshot, config_path, orientation)
    svg = SvgRenderer().render(result, selected=selected)
    if output is None:
        click.echo(svg)
    else:
        output.write_text(svg + "\n")
        click.echo(f"Wrote {output}", err=True)


# ──────────────────────────────────────────────────────────────
# branch-canvas diff
# ──────────────────────────────────────────────────────────────


@main.command()
@click.argument("old", type=_EXISTING_FILE)
@click.argument("new", type=_EXISTING_FILE)
def diff(old: Path, new: Path) -> None:
    """Line diff of two text files, as an instruction-edit preview."""
    lines = compute_line_diff(old.read_text(), new.read_text())
    if lines:
        click.echo(format_diff(lines))
    stats = diff_stats(lines)
    click.echo(f"+{stats[DiffKind.ADDED]} -{stats[DiffKind.REMOVED]}", err=True)
