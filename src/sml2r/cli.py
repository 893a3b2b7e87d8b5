"""CLI interface for the SML2 randomizer."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from sml2r import __version__
from sml2r.config import get_settings
from sml2r.errors import RandomizerError
from sml2r.flags import OPTION_FLAGS, FeatureMask
from sml2r.randomizer import Randomizer
from sml2r.resources import PatchLibrary
from sml2r.rom import header

app = typer.Typer(
    name="sml2r",
    help="Seeded randomizer for Super Mario Land 2 images",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"sml2r version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each pass")] = False,
):
    """SML2 Randomizer - reproducible randomized Super Mario Land 2 images."""
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


# --- Shared helpers ---


def _parse_hex(value: str, what: str) -> int:
    try:
        return int(value, 16)
    except ValueError:
        console.print(f"[red]Error: {what} must be hexadecimal, got {value!r}[/]")
        raise typer.Exit(1)


def _read_rom(path: Path) -> bytes:
    if not path.is_file():
        console.print(f"[red]Image not found: {path}[/]")
        raise typer.Exit(1)
    return path.read_bytes()


def _flag_table(mask: FeatureMask) -> Table:
    table = Table(title=f"Flags {mask.to_hex()}")
    table.add_column("Bit", justify="right")
    table.add_column("Option")
    table.add_column("Enabled")
    for name, flag in OPTION_FLAGS.items():
        enabled = flag in mask
        table.add_row(
            str(flag.bit_length() - 1),
            name,
            "[green]yes[/]" if enabled else "[dim]no[/]",
        )
    return table


@app.command()
def randomize(
    rom: Annotated[Path, typer.Argument(help="Clean Super Mario Land 2 image")],
    seed: Annotated[Optional[str], typer.Option("--seed", "-s", help="Seed (hex, 10000000-FFFFFFFF)")] = None,
    flags: Annotated[Optional[str], typer.Option("--flags", "-f", help="Feature mask (hex)")] = None,
    option: Annotated[Optional[list[str]], typer.Option("--option", "-O", help="Enable a named option (repeatable)")] = None,
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output file or directory")] = None,
    patches_dir: Annotated[Optional[Path], typer.Option("--patches-dir", help="Directory holding the IPS patches")] = None,
):
    """Write a randomized copy of an image.

    Examples:
        sml2r randomize sml2.gb --flags 000001
        sml2r randomize sml2.gb --seed 1A2B3C4D -O random_enemies -O random_music
    """
    settings = get_settings()
    data = _read_rom(rom)

    if flags is not None and option:
        console.print("[red]Error: use either --flags or --option, not both[/]")
        raise typer.Exit(1)

    if option:
        unknown = [name for name in option if name not in OPTION_FLAGS]
        if unknown:
            console.print(f"[red]Unknown option(s): {', '.join(unknown)}[/]")
            raise typer.Exit(1)
        options: int | dict[str, bool] = {name: True for name in option}
    elif flags is not None:
        options = _parse_hex(flags, "--flags")
    else:
        options = 0

    seed_value = _parse_hex(seed, "--seed") if seed is not None else None
    patches = PatchLibrary(patches_dir or settings.patches_dir)
    randomizer = Randomizer(data, options, seed=seed_value, patches=patches)

    if not randomizer.valid:
        console.print("[red]Not a clean Super Mario Land 2 image[/]")
        raise typer.Exit(1)

    console.print(Panel(
        f"Version: {randomizer.get_version()} | Seed: {randomizer.get_seed()} | "
        f"Flags: {randomizer.get_flags()}",
        title="SML2 Randomizer",
    ))

    try:
        result = randomizer.randomize()
    except RandomizerError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    out_name = f"{rom.stem}-{randomizer.get_seed()}-{randomizer.get_flags()}{rom.suffix or '.gb'}"
    target = output or settings.output_dir
    if target.suffix == "" or target.is_dir():
        target = target / out_name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(bytes(result))

    for name in randomizer.passes_run:
        console.print(f"  [green]{name}[/]")
    console.print(f"\n[bold green]Written to:[/] {target}")


@app.command()
def info(
    rom: Annotated[Path, typer.Argument(help="Image to inspect")],
):
    """Show header details of an image."""
    data = _read_rom(rom)
    if len(data) <= header.GLOBAL_CHECKSUM_OFFSET + 1:
        console.print("[red]File is too small to hold a cartridge header[/]")
        raise typer.Exit(1)

    table = Table(title=str(rom.name))
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Valid", "[green]yes[/]" if header.is_valid(data) else "[red]no[/]")
    table.add_row("Version", f"v1.{header.version(data)}")
    table.add_row("Size class", f"0x{data[header.SIZE_CLASS_OFFSET]:02X}")
    table.add_row("Size", f"0x{len(data):X} (expected 0x{header.expected_size(data):X})")

    stored_global = int.from_bytes(
        data[header.GLOBAL_CHECKSUM_OFFSET : header.GLOBAL_CHECKSUM_OFFSET + 2], "big"
    )
    table.add_row(
        "Header checksum",
        f"0x{data[header.HEADER_CHECKSUM_OFFSET]:02X} (computed 0x{header.header_checksum(data):02X})",
    )
    if len(data) >= header.expected_size(data):
        table.add_row(
            "Global checksum",
            f"0x{stored_global:04X} (computed 0x{header.global_checksum(data):04X})",
        )
    console.print(table)


@app.command("flags")
def show_flags(
    mask: Annotated[str, typer.Argument(help="Feature mask (hex)")],
):
    """Decode a feature mask, after normalization."""
    value = _parse_hex(mask, "mask")
    try:
        decoded = FeatureMask.from_int(value)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)
    console.print(_flag_table(decoded))


if __name__ == "__main__":
    app()
