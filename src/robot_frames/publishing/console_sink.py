"""Define a transform sink that prints each batch of transforms as a table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from robot_frames.io.logging import console as default_console

if TYPE_CHECKING:
    from collections.abc import Sequence

    from robot_frames.publishing.transform_records import TransformRecord


class ConsoleSink:
    """A transform sink that displays the transforms it receives using a rich table."""

    def __init__(self, title: str, console: Console | None = None) -> None:
        """Initialize the sink with the title shown above each printed batch."""
        self.title = title
        self._console = console or default_console

    def send(self, records: Sequence[TransformRecord]) -> None:
        """Print the given batch of transform records."""
        table = Table(title=f"{self.title} ({len(records)} transforms)")
        table.add_column("Parent")
        table.add_column("Child")
        table.add_column("Stamp (s)", justify="right")
        table.add_column("x, y, z (m)", justify="right")
        table.add_column("roll, pitch, yaw (rad)", justify="right")

        for record in sorted(records, key=lambda r: (r.parent_frame, r.child_frame)):
            xyz = ", ".join(f"{value:.4f}" for value in record.pose.position)
            rpy = ", ".join(f"{value:.4f}" for value in record.pose.orientation.to_euler_rpy())
            table.add_row(record.parent_frame, record.child_frame, f"{record.stamp:.3f}", xyz, rpy)

        self._console.print(table)
