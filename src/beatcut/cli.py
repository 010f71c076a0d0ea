import logging
import random
import sys
from pathlib import Path
from typing import Optional

import click

from .beat_io import dump_cut_markers, load_cut_request
from .core import (
    CutPlacementEngine,
    add_time_variation,
    build_plan_segments,
    max_recommended_plans,
    validate_region,
)
from ._version import VERSION
from .exceptions import BeatcutError, InvalidRegionError
from .logger import configure_file_logging, logger

# Default plan count offered by the timeline's random mode
DEFAULT_PLAN_COUNT = 4

# Lazy load rich to improve startup time
_console = None

def get_console():
    global _console
    if _console is None:
        from rich.console import Console
        _console = Console()
    return _console


def _fail(message: str) -> None:
    get_console().print(f"[bold red]❌ {message}[/]")
    sys.exit(1)


def _resolve_region(request, start: Optional[float], end: Optional[float]):
    start_time = start if start is not None else (request.start_time or 0.0)
    end_time = end if end is not None else request.end_time
    if end_time is None:
        raise click.UsageError("--end is required when the beat file has no end_time")
    try:
        validate_region(start_time, end_time)
    except InvalidRegionError as e:
        _fail(str(e))
    return start_time, end_time


@click.group()
@click.version_option(version=VERSION, prog_name="beatcut")
@click.option("--debug", is_flag=True, help="Log candidates and grid details")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also write a detailed log file")
def cli(debug, log_file):
    """Beatcut - beat-synced cut placement for music-driven edits"""
    if debug:
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)
    if log_file:
        configure_file_logging(Path(log_file))


@cli.command()
@click.argument("beats_file", type=click.Path(dir_okay=False))
@click.option("--start", type=float, default=None, help="Region start in seconds")
@click.option("--end", type=float, default=None, help="Region end in seconds")
@click.option("--plans", type=int, default=None, help="Number of plans (cuts = plans - 1)")
@click.option("--min-interval", type=float, default=None, help="Minimum spacing between cuts in seconds")
@click.option("--jitter", type=float, default=0.0, help="Random time variation applied to each cut")
@click.option("--seed", type=int, default=None, help="Seed for --jitter")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write cuts as JSON")
@click.option("--segments/--no-segments", default=False, help="Also list the resulting plans")
def generate(beats_file, start, end, plans, min_interval, jitter, seed, output, segments):
    """Place beat-synced cuts for a beat file."""
    console = get_console()
    from rich.table import Table

    try:
        request = load_cut_request(beats_file)
    except BeatcutError as e:
        _fail(str(e))

    start_time, end_time = _resolve_region(request, start, end)
    plan_count = plans if plans is not None else (request.plan_count or DEFAULT_PLAN_COUNT)
    min_cut_interval = min_interval if min_interval is not None else request.min_cut_interval

    if plan_count > max_recommended_plans(start_time, end_time):
        console.print("[yellow]⚠️  Many cuts for this duration - might feel too fast[/]")

    try:
        cuts = CutPlacementEngine().generate(
            start_time, end_time, plan_count, request.markers(), min_cut_interval=min_cut_interval
        )
    except BeatcutError as e:
        _fail(str(e))

    if not cuts:
        if plan_count < 2:
            console.print("[yellow]⚠️  Need at least 2 plans to place a cut[/]")
        else:
            console.print(
                f"[yellow]⚠️  No cuts generated: {end_time - start_time:.2f}s is too short "
                f"for {plan_count} plans[/]"
            )
        return

    if jitter > 0:
        cuts = sorted(add_time_variation(cuts, jitter, random.Random(seed)), key=lambda c: c.time)

    table = Table(title=f"{len(cuts)} cuts for {plan_count} plans")
    table.add_column("#", justify="right")
    table.add_column("Time (s)", justify="right", style="cyan")
    table.add_column("Duration (s)", justify="right")
    table.add_column("Color", style="magenta")
    for index, cut in enumerate(cuts, start=1):
        table.add_row(str(index), f"{cut.time:.2f}", f"{cut.duration:.2f}", cut.color)
    console.print(table)

    if segments:
        plan_table = Table(title="Plans")
        plan_table.add_column("Plan", justify="right")
        plan_table.add_column("Start (s)", justify="right")
        plan_table.add_column("End (s)", justify="right")
        for segment in build_plan_segments(cuts, start_time, end_time):
            plan_table.add_row(str(segment.plan_index), f"{segment.start_time:.2f}", f"{segment.end_time:.2f}")
        console.print(plan_table)

    if output:
        dump_cut_markers(cuts, output)
        console.print(f"💾 Saved cuts to [bold]{output}[/]")


@cli.command()
@click.argument("beats_file", type=click.Path(dir_okay=False))
@click.option("--start", type=float, default=None, help="Region start in seconds")
@click.option("--end", type=float, default=None, help="Region end in seconds")
def analyze(beats_file, start, end):
    """Show the measure grid and drops found in a beat file."""
    console = get_console()
    from rich.table import Table

    try:
        request = load_cut_request(beats_file)
    except BeatcutError as e:
        _fail(str(e))

    markers = request.markers()
    start_time, end_time = _resolve_region(request, start, end)

    analysis = CutPlacementEngine().analyze(markers, start_time, end_time)
    console.print(f"🎵 {len(analysis.beats)} beats in {start_time:.2f}s → {end_time:.2f}s")

    if analysis.bpm is not None:
        console.print(f"   Tempo: [bold green]{analysis.bpm:.1f} BPM[/] (measure {analysis.measure_duration:.2f}s)")
    else:
        console.print("   [yellow]No reliable measure grid[/]")

    measure_table = Table(title=f"{len(analysis.measures)} measures")
    measure_table.add_column("Start (s)", justify="right", style="cyan")
    measure_table.add_column("Confidence", justify="right")
    for measure in analysis.measures:
        measure_table.add_row(f"{measure.start_time:.2f}", f"{measure.confidence:.2f}")
    console.print(measure_table)

    drop_table = Table(title=f"{len(analysis.drops)} drops")
    drop_table.add_column("Time (s)", justify="right", style="cyan")
    drop_table.add_column("Silence (s)", justify="right")
    drop_table.add_column("Intensity", justify="right")
    for drop in analysis.drops:
        drop_table.add_row(f"{drop.time:.2f}", f"{drop.silence_duration:.2f}", f"{drop.intensity:.2f}")
    console.print(drop_table)


if __name__ == "__main__":
    cli()
