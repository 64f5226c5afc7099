"""CLI interface for bar-race."""

import logging
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .animation_pipeline import encode_animation
from .chart.options import BarChartOptions
from .chart.timeline import group_timelines, normalize_rows, resolve_window
from .constants import (
    DEFAULT_DATE_FIELD,
    DEFAULT_DATE_FORMAT,
    DEFAULT_DURATION,
    DEFAULT_FPS,
    DEFAULT_ID_FIELD,
    DEFAULT_ITEM_COUNT,
    DEFAULT_SHAPE,
    DEFAULT_SWAP,
    DEFAULT_VALUE_FIELD,
)
from .dataset import Row, load_meta, load_rows
from .errors import BarRaceError
from .output import resolve_output_provider, supported_output_formats

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_formats()).upper()


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def main(
    data: str = typer.Argument(None, help="Data file (JSON list of rows or CSV)"),
    meta: str = typer.Option(None, "--meta", "-m", help="Metadata file keyed by the id field"),
    out: str = typer.Option(
        None,
        "--output",
        "-o",
        help=f"Animation output path ({SUPPORTED_OUTPUT_FORMATS_TEXT})",
    ),
    fps: int = typer.Option(DEFAULT_FPS, "--fps", envvar="BAR_RACE_FPS", help="Frames per second"),
    duration: float = typer.Option(
        DEFAULT_DURATION, "--duration", envvar="BAR_RACE_DURATION", help="Scene length in seconds"
    ),
    item_count: int = typer.Option(
        DEFAULT_ITEM_COUNT, "--item-count", "-n", envvar="BAR_RACE_ITEM_COUNT", help="Visible bars"
    ),
    swap: float = typer.Option(
        DEFAULT_SWAP, "--swap", envvar="BAR_RACE_SWAP", help="Seconds a rank change takes to settle"
    ),
    id_field: str = typer.Option(DEFAULT_ID_FIELD, "--id-field", envvar="BAR_RACE_ID_FIELD"),
    date_field: str = typer.Option(DEFAULT_DATE_FIELD, "--date-field", envvar="BAR_RACE_DATE_FIELD"),
    value_field: str = typer.Option(DEFAULT_VALUE_FIELD, "--value-field", envvar="BAR_RACE_VALUE_FIELD"),
    date_format: str = typer.Option(
        DEFAULT_DATE_FORMAT,
        "--date-format",
        envvar="BAR_RACE_DATE_FORMAT",
        help="strptime format for dates that are not ISO-8601 or a bare year",
    ),
    width: int = typer.Option(DEFAULT_SHAPE[0], "--width", envvar="BAR_RACE_WIDTH"),
    height: int = typer.Option(DEFAULT_SHAPE[1], "--height", envvar="BAR_RACE_HEIGHT"),
    max_frames: int | None = typer.Option(None, "--max-frames", help="Maximum number of frames to render"),
    watermark: bool = typer.Option(False, "--watermark", help="Add watermark to the output animation"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """
    Render a bar chart race animation from a time series file.

    Examples:
      bar-race data.csv --output race.gif

      bar-race data.json --meta names.json --item-count 10 --duration 20 -o race.webp
    """
    _configure_logging(verbose)
    try:
        if not data:
            raise CLIError("Data file is required")
        if not out:
            out = f"{Path(data).stem}-bar-race.gif"

        options = BarChartOptions(
            item_count=item_count,
            id_field=id_field,
            date_field=date_field,
            value_field=value_field,
            date_format=date_format,
            swap=swap,
            fps=fps,
            shape=(width, height),
        )
        rows = load_rows(data)
        meta_rows = load_meta(meta)

        _display_summary(rows, options, duration)
        _generate_output(rows, meta_rows, out, options, duration, watermark, max_frames)

    except (CLIError, BarRaceError) as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _display_summary(rows: list[Row], options: BarChartOptions, duration: float) -> None:
    """Print dataset size and timing before rendering."""
    timelines = group_timelines(normalize_rows(rows, options).observations)
    table = Table(title="Bar chart race")
    table.add_column("Setting")
    table.add_column("Value", justify="right")
    table.add_row("Rows", str(len(rows)))
    table.add_row("Entities", str(len(timelines)))
    table.add_row("Visible bars", str(options.item_count))
    window = resolve_window(options, duration)
    table.add_row("Window", f"[{window.start:.2f}, {window.end:.2f}]")
    table.add_row("Frames", str(round(duration * options.fps)))
    table.add_row("Rank samples per swap", str(options.sampling))
    console.print(table)


def _generate_output(
    rows: list[Row],
    meta_rows: list[Row],
    output_path: str,
    options: BarChartOptions,
    duration: float,
    watermark: bool,
    max_frames: int | None,
) -> None:
    """Generate the animation in the format given by ``output_path``."""
    # Warn about GIF FPS limitation
    if output_path.lower().endswith(".gif") and options.fps > 50:
        console.print(
            f"[yellow]Warning:[/yellow] FPS > 50 may not display correctly in browsers "
            f"(GIF delay will be {1000 // options.fps}ms)"
        )

    try:
        provider = resolve_output_provider(output_path)
    except ValueError as e:
        raise CLIError(f"Failed to generate output: {e}")

    ext = Path(output_path).suffix[1:].upper()
    console.print(f"\n[bold blue]Generating {ext} animation...[/bold blue]")

    try:
        encoded = encode_animation(
            rows,
            meta_rows,
            output_path,
            options=options,
            scene_duration=duration,
            watermark=watermark,
            max_frames=max_frames,
            provider=provider,
        )
    except ValueError as e:
        raise CLIError(f"Failed to generate output: {e}")

    console.print(f"[bold blue]Saving to {output_path}...[/bold blue]")
    try:
        provider.write(encoded)
    except (ValueError, IOError) as e:
        raise CLIError(f"Failed to save file '{output_path}': {e}")
    console.print(f"[green]✓[/green] {ext} saved to {output_path}")


app = typer.Typer()
app.command()(main)

if __name__ == "__main__":
    app()
