"""CLI application entry point for curbmap.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from curbmap import __version__
from curbmap.cli.output import (
    console,
    print_blockface_info,
    print_error,
    print_header,
    print_partition,
    print_step,
    print_success,
)
from curbmap.config import CurbMapSettings, LoggingConfig
from curbmap.core import (
    PartitionStore,
    blockface_length_feet,
    initialize,
    offsets,
    path_length,
    project_partition,
)
from curbmap.domain import AddSegment, Partition, Resize, SegmentType, SetType
from curbmap.exceptions import (
    BlockfaceError,
    BlockfaceLoadError,
    CurbMapError,
    InvalidAdjustmentError,
    OutputWriteError,
)
from curbmap.io import FeatureCollectionWriter, read_blockface
from curbmap.utils import ProjectionLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="curbmap",
    help="Partition blockfaces into curb segments and project them onto street geometry.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Curbmap[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Partition blockfaces into curb segments and project them onto street geometry."""


def parse_segment_spec(spec: str) -> tuple[SegmentType, float]:
    """Parse a ``TYPE:LENGTH`` segment specification.

    The type may be given by label ("Curb Cut") or by name ("curb_cut").

    Args:
        spec: Specification such as ``Parking:40``

    Returns:
        Tuple of (segment type, length in feet)

    Raises:
        typer.BadParameter: If the specification cannot be parsed
    """
    label, sep, length_text = spec.rpartition(":")
    if not sep or not label.strip():
        raise typer.BadParameter(f"expected TYPE:LENGTH, got {spec!r}")

    label = label.strip()
    try:
        segment_type = SegmentType(label)
    except ValueError:
        name = label.upper().replace(" ", "_").replace("-", "_")
        if name not in SegmentType.__members__:
            valid = ", ".join(t.value for t in SegmentType)
            raise typer.BadParameter(f"unknown segment type {label!r} (valid: {valid})") from None
        segment_type = SegmentType[name]

    try:
        length = float(length_text)
    except ValueError:
        raise typer.BadParameter(f"invalid length {length_text!r} in {spec!r}") from None
    if length <= 0:
        raise typer.BadParameter(f"length must be positive in {spec!r}")

    return segment_type, length


def build_partition(
    total_length: float,
    blockface_id: str | None,
    specs: list[tuple[SegmentType, float]],
    settings: CurbMapSettings,
) -> Partition:
    """Build a partition by dispatching one segment at a time.

    Each segment is seeded from unknown space, relabelled and resized, the
    same edits an operator would make.

    Raises:
        InvalidAdjustmentError: If a segment does not fit
    """
    partition = initialize(total_length, blockface_id, settings.partition)
    store = PartitionStore(partition, settings.partition)

    for segment_type, length in specs:
        index = store.partition.segment_count
        for action in (AddSegment(index - 1), SetType(index, segment_type), Resize(index, length)):
            result = store.dispatch(action)
            if not result.applied:
                raise InvalidAdjustmentError(
                    f"segment {index + 1} ({segment_type.value}, {length:g} ft) "
                    f"does not fit: {result.reason}"
                )

    return store.partition


@app.command()
def inspect(
    blockface_file: Annotated[
        Path,
        typer.Argument(help="Path to a GeoJSON blockface LineString", show_default=False),
    ],
) -> None:
    """Show a blockface's vertex count and geodesic length."""
    settings = CurbMapSettings()

    try:
        blockface = read_blockface(blockface_file)
    except BlockfaceError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    print_header(__version__)
    print_blockface_info(
        source=str(blockface_file),
        blockface=blockface,
        length_km=path_length(blockface.path, settings.geometry.earth_radius_km),
        length_ft=blockface_length_feet(blockface.path, settings.geometry),
    )


@app.command()
def project(
    blockface_file: Annotated[
        Path,
        typer.Argument(help="Path to a GeoJSON blockface LineString", show_default=False),
    ],
    segment: Annotated[
        list[str],
        typer.Option(
            "--segment",
            "-s",
            help="Segment as TYPE:LENGTH in feet, in order from the start of the line (repeatable)",
            show_default=False,
        ),
    ],
    length: Annotated[
        float | None,
        typer.Option(
            "--length",
            "-l",
            help="Blockface length in feet (default: measured from the geometry)",
            min=0.1,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-segments.geojson)",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file (default: curbmap_{timestamp}.log)",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Divide a blockface into segments and write each segment's geometry.

    Example:
        curbmap project blockface.geojson -s Parking:40 -s "Curb Cut:10" -s Loading:20

    This will create blockface-segments.geojson with one LineString per segment.
    """
    specs = [parse_segment_spec(s) for s in segment]

    settings = CurbMapSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    try:
        logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=quiet,
        )
        projection_logger = ProjectionLogger(logger)

        if not quiet:
            print_header(__version__)
            print_step("Loading blockface")

        blockface = read_blockface(blockface_file)
        measured_ft = blockface_length_feet(blockface.path, settings.geometry)
        total_length = length if length is not None else measured_ft

        if not quiet:
            print_blockface_info(
                source=str(blockface_file),
                blockface=blockface,
                length_km=path_length(blockface.path, settings.geometry.earth_radius_km),
                length_ft=measured_ft,
            )
            print_step("Building segments")

        partition = build_partition(total_length, blockface.id, specs, settings)

        if not quiet:
            print_partition(partition, offsets(partition))
            print_step("Projecting")

        features = project_partition(
            partition, blockface.path, settings.geometry, projection_logger
        )

        output_path = output or FeatureCollectionWriter.get_segments_path(blockface_file)
        FeatureCollectionWriter(features).save(output_path)

        if not quiet:
            print_success(
                output_path=str(output_path),
                features=features,
                segment_count=partition.segment_count,
                errors=projection_logger.stats.degraded_count,
            )

    except BlockfaceLoadError as e:
        print_error(f"Could not load blockface: {e.reason}")
        raise typer.Exit(code=1) from None
    except OutputWriteError as e:
        print_error(f"Could not write output: {e.reason}")
        raise typer.Exit(code=1) from None
    except CurbMapError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
