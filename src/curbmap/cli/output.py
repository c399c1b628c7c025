"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from curbmap.domain import Blockface, Partition, SegmentFeature

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Curbmap[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_blockface_info(
    source: str, blockface: Blockface, length_km: float, length_ft: float
) -> None:
    """Print blockface information.

    Args:
        source: Path the blockface was read from
        blockface: Loaded blockface
        length_km: Geodesic length in kilometers
        length_ft: Length in feet
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(source)
    line1.append(f" ({blockface.id})")
    console.print(line1)
    if blockface.street_name:
        console.print(f"  {blockface.street_name}")
    console.print(
        f"  {blockface.vertex_count} vertices {SYM_DOT} {length_km:.4f} km {SYM_DOT} {length_ft:,.0f} ft"
    )


def print_partition(partition: Partition, ticks: Sequence[float]) -> None:
    """Print a partition as a table of segments and their offsets.

    Args:
        partition: Partition to show
        ticks: Cumulative offsets of the partition
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Start", justify="right")
    table.add_column("Length", justify="right")

    for i, segment in enumerate(partition.segments):
        table.add_row(
            str(i),
            Text(segment.type.value, style=segment.color),
            f"{ticks[i]:g} ft",
            f"{segment.length:g} ft",
        )
    console.print(table)

    status = "complete" if partition.is_collection_complete else "incomplete"
    console.print(
        f"  {partition.blockface_length:g} ft blockface {SYM_DOT} "
        f"{partition.unknown_remaining:g} ft unknown {SYM_DOT} {status}"
    )


def print_success(
    output_path: str, features: Sequence[SegmentFeature], segment_count: int, errors: int
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        features: Features that were written
        segment_count: Segments in the partition
        errors: Segments whose projection failed
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green]")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {len(features)} of {segment_count} segments written {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
