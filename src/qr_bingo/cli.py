from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional, Tuple

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import BingoConfig, load_bingo_config, resolve_parameters
from .core import BingoSession, GenerationParams, SheetGenerator
from .logging_setup import setup_logging
from .models import Sheet
from .payload import PayloadError, parse_payload
from .qr import write_variation_codes
from .rng import RandomSource, create_rng
from .store import JsonFileSheetStore
from .verify import coverage_report
from .version import __version__

app = typer.Typer(help="QR-scanned bingo sheet CLI")


@app.callback(invoke_without_command=True)
def common_options(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", help="Show application version and exit", is_eager=True
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def _fail(message: str, code: int = 1) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=code)


def _resolve(
    config: Optional[str], cli_overrides: Dict[str, Any]
) -> Tuple[Dict[str, Any], str]:
    try:
        resolved, params_hash, _cfg_path = resolve_parameters(
            config_path_str=config, cli_overrides=cli_overrides
        )
    except (FileNotFoundError, ValueError) as exc:
        _fail(f"Config error: {exc}", code=2)
    setup_logging(
        level=str(resolved.get("log_level", "INFO")),
        log_file=resolved.get("log_file"),
        json_format=(str(resolved.get("log_format", "text")) == "json"),
    )
    return resolved, params_hash


def _load_config(resolved: Dict[str, Any]) -> BingoConfig:
    try:
        return load_bingo_config(resolved)
    except ValueError as exc:
        _fail(f"Config error: {exc}", code=2)


def _session(
    resolved: Dict[str, Any],
    params_hash: Optional[str] = None,
    rng: Optional[RandomSource] = None,
) -> BingoSession:
    store = JsonFileSheetStore(resolved["store_path"], params_hash=params_hash)
    return BingoSession(store, SheetGenerator(rng))


def render_sheet(sheet: Sheet) -> Table:
    """Grid view: punched slots are checked, bingo slots highlighted."""
    table = Table(title=f"Bingo sheet {sheet.width}x{sheet.height}", show_lines=True)
    for x in range(sheet.width):
        table.add_column(str(x), justify="center")
    for row in sheet.slots:
        cells = []
        for slot in row:
            text = slot.label or str(slot.value)
            if slot.bingo:
                cells.append(Text(f"★ {text}", style="bold black on yellow"))
            elif slot.punched:
                cells.append(Text(f"✔ {text}", style="bold green"))
            else:
                cells.append(Text(text))
        table.add_row(*cells)
    return table


@app.command()
def init(
    config: Optional[str] = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    store: Optional[str] = typer.Option(None, "--store", help="Sheet store JSON path"),
    width: Optional[int] = typer.Option(None, "--width", help="Override sheet.width"),
    height: Optional[int] = typer.Option(None, "--height", help="Override sheet.height"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible sheets"),
    force: bool = typer.Option(False, "--force", help="Replace an existing sheet"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG|INFO|WARN|ERROR"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Log file path"),
) -> None:
    """Generate a new sheet and save it as the live sheet."""
    cli_overrides: Dict[str, Any] = {}
    if store:
        cli_overrides["store_path"] = store
    if width is not None:
        cli_overrides["sheet.width"] = width
    if height is not None:
        cli_overrides["sheet.height"] = height
    if seed is not None:
        cli_overrides["seed.value"] = seed
    if log_level:
        cli_overrides["log_level"] = log_level
    if log_file:
        cli_overrides["log_file"] = log_file

    resolved, params_hash = _resolve(config, cli_overrides)
    cfg = _load_config(resolved)

    try:
        rng = create_rng(cfg.rng_engine, cfg.seed)
    except (ValueError, RuntimeError) as exc:
        _fail(f"Config error: {exc}", code=2)
    session = _session(resolved, params_hash, rng=rng)

    params = GenerationParams(width=cfg.width, height=cfg.height, variations=cfg.variations)
    try:
        sheet = session.start(params, force=force)
    except FileExistsError as exc:
        _fail(f"{exc}; pass --force to replace it")
    except ValueError as exc:
        _fail(str(exc))

    console = Console()
    console.print(render_sheet(sheet))
    report = coverage_report(sheet, cfg.variations)
    typer.echo(
        f"Slots: {report['length']}, variations: {report['catalog_size']}, "
        f"min per variation: {report['min_expected']}, coverage ok: {report['ok_coverage']}"
    )
    typer.echo(f"Saved to {resolved['store_path']}")


@app.command()
def scan(
    payload: str = typer.Argument(..., help='Decoded QR text, e.g. {"value": "A1"}'),
    config: Optional[str] = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    store: Optional[str] = typer.Option(None, "--store", help="Sheet store JSON path"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG|INFO|WARN|ERROR"),
) -> None:
    """Punch the slot(s) matching a scanned payload and report bingo."""
    cli_overrides: Dict[str, Any] = {}
    if store:
        cli_overrides["store_path"] = store
    if log_level:
        cli_overrides["log_level"] = log_level
    resolved, _hash = _resolve(config, cli_overrides)

    try:
        decoded = parse_payload(payload)
    except PayloadError as exc:
        _fail(f"Invalid payload: {exc}", code=2)

    session = _session(resolved)
    try:
        outcome = session.scan(decoded)
    except (LookupError, ValueError) as exc:
        _fail(str(exc))

    if not outcome.matched:
        typer.echo(f"No slot matches {decoded.value!r}; scan ignored.")
        return
    typer.echo(f"Punched {len(outcome.punched)} slot(s) with value {decoded.value!r}.")
    Console().print(render_sheet(outcome.sheet))
    if outcome.is_bingo:
        typer.secho("BINGO!", fg=typer.colors.YELLOW, bold=True)


@app.command()
def show(
    config: Optional[str] = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    store: Optional[str] = typer.Option(None, "--store", help="Sheet store JSON path"),
) -> None:
    """Print the live sheet."""
    cli_overrides: Dict[str, Any] = {"store_path": store} if store else {}
    resolved, _hash = _resolve(config, cli_overrides)
    try:
        sheet = _session(resolved).require()
    except (LookupError, ValueError) as exc:
        _fail(str(exc))
    Console().print(render_sheet(sheet))
    typer.echo(f"Initialized: {sheet.initialized.isoformat()}")


@app.command()
def codes(
    config: Optional[str] = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    out_dir: Optional[str] = typer.Option(None, "--out-dir", help="Directory for QR PNGs"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing PNGs"),
) -> None:
    """Write one scannable QR code per variation."""
    cli_overrides: Dict[str, Any] = {"qr_dir": out_dir} if out_dir else {}
    resolved, _hash = _resolve(config, cli_overrides)
    cfg = _load_config(resolved)
    try:
        written = write_variation_codes(cfg.variations, Path(resolved["qr_dir"]), overwrite=force)
    except FileExistsError as exc:
        _fail(str(exc))
    typer.echo(f"Wrote {len(written)} QR code(s) to {resolved['qr_dir']}")


def main(_argv: list[str] | None = None) -> int:
    try:
        app(standalone_mode=True)
        return 0
    except SystemExit as e:
        return int(e.code) if e.code is not None else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
