"""
Command-line interface for FITS Cutter.

Single position:
    $ fits-cutter field.fits --ra 218.0 --dec 34.5 --size 0.0417 --outfile src1

Position table (one ``<name>.fits`` per row of a ``name, ra, dec`` CSV):
    $ fits-cutter field.fits --size 0.0417 --sourcetable sources.csv --workers 8

Exit status is 0 when every cutout was written or skipped (position off the
image), 1 when the source image has no usable pixel scale or any cutout
failed.
"""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fits_cutter import __version__
from fits_cutter.config import get_settings, load_settings
from fits_cutter.exceptions import CutoutError, PixelScaleError, PositionTableError
from fits_cutter.models import CutoutResult, CutoutStatus, SkyPosition
from fits_cutter.processing import BatchResult, CutoutRunner
from fits_cutter.sources import read_position_table
from fits_cutter.utils.logging import get_logger, setup_logging

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def _print_result(result: CutoutResult) -> None:
    name = escape(result.name)
    if result.status == CutoutStatus.WRITTEN:
        console.print(
            f"[green]✓[/green] {name}: {result.imsize}x{result.imsize} -> "
            f"{escape(str(result.output_path))}"
        )
    elif result.status == CutoutStatus.SKIPPED:
        console.print(escape(result.message or f"Source {result.name} skipped"))
    else:
        err_console.print(f"[red]✗[/red] {name}: {escape(result.message or 'failed')}")


def _print_summary(batch: BatchResult) -> None:
    table = Table(title="Cutout Summary")
    table.add_column("Status", style="cyan")
    table.add_column("Count", justify="right")

    table.add_row("Written", f"{batch.written_count:,}")
    table.add_row("Skipped", f"{batch.skipped_count:,}")
    table.add_row("Failed", f"{batch.failed_count:,}")
    table.add_row("Duration", f"{batch.total_elapsed_seconds:.2f}s")

    console.print(table)

    for failure in batch.failures:
        err_console.print(
            f"[red]Failed:[/red] {escape(failure.name)}: {escape(failure.message or '')}"
        )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="fits-cutter")
@click.argument("fitsimage", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--ra", type=float, default=0.0, show_default=True, help="Right ascension to centre the cutout on (deg)")
@click.option("--dec", type=float, default=0.0, show_default=True, help="Declination to centre the cutout on (deg)")
@click.option(
    "--size",
    type=click.FloatRange(min=0.0, min_open=True),
    required=True,
    help="Width and height of the cutout (deg)",
)
@click.option("--outfile", default="output", show_default=True, help="Output name, written as <outfile>.fits")
@click.option(
    "--sourcetable",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="CSV of name, ra, dec (no header); overrides --ra/--dec/--outfile",
)
@click.option(
    "--outdir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for cutout files (overrides config)",
)
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Worker threads for --sourcetable (overrides config)")
@click.option("--overwrite", is_flag=True, default=False, help="Replace existing cutout files")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Configuration file path",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(
    ctx: click.Context,
    fitsimage: Path,
    ra: float,
    dec: float,
    size: float,
    outfile: str,
    sourcetable: Path | None,
    outdir: Path | None,
    workers: int | None,
    overwrite: bool,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Make a cutout of a FITS file.

    Cuts a SIZE-degree square centred on (RA, DEC) out of FITSIMAGE and
    writes it with a recentred WCS header.
    """
    settings = load_settings(config_path) if config_path else get_settings()

    log_level = "DEBUG" if verbose else settings.logging.level
    setup_logging(
        level=log_level,
        format=settings.logging.format,
        include_timestamp=settings.logging.include_timestamp,
        include_location=settings.logging.include_location,
    )
    logger = get_logger(__name__)

    try:
        runner = CutoutRunner(
            fitsimage,
            size,
            workers=workers or settings.cutout.workers,
            output_dir=outdir or settings.cutout.output_dir,
            overwrite=overwrite or settings.cutout.overwrite,
        )
    except PixelScaleError as e:
        logger.error("invalid_pixel_scale", path=str(fitsimage), key=e.key)
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)
    except (CutoutError, OSError) as e:
        err_console.print(f"[red]Error:[/red] cannot open {escape(str(fitsimage))}: {escape(str(e))}")
        ctx.exit(1)

    if sourcetable is None:
        try:
            position = SkyPosition(name=outfile, ra=ra, dec=dec)
        except ValueError as e:
            err_console.print(f"[red]Error:[/red] invalid position: {escape(str(e))}")
            ctx.exit(1)

        target = Path(f"{outfile}.fits")
        if runner.output_dir is not None:
            target = runner.output_dir / target

        result = runner.run_one(position, target)
        _print_result(result)
        if result.status == CutoutStatus.FAILED:
            ctx.exit(1)
        return

    try:
        rows = read_position_table(sourcetable)
    except PositionTableError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)

    console.print(f"Found {len(rows)} sources in catalogue")

    with console.status("[bold green]Making cutouts..."):
        batch = runner.run_batch(rows)

    for result in batch.results:
        if result.status != CutoutStatus.FAILED:
            _print_result(result)

    console.print()
    _print_summary(batch)

    if not batch.all_success:
        ctx.exit(1)


if __name__ == "__main__":
    main()
