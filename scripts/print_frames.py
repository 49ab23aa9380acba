"""Print the transforms between a robot's frames for given joint positions, without ROS."""

from __future__ import annotations

from pathlib import Path

import click

from robot_frames.io import console, log_error
from robot_frames.io.urdf_loading import try_load_body_description
from robot_frames.io.yaml_utils import load_joint_positions
from robot_frames.publishing import (
    BodyDescriptionSource,
    ConsoleSink,
    PublishStatus,
    RobotStatePublisher,
)


def print_frames(urdf_path: Path, positions_path: Path | None, stamp: float) -> bool:
    """Print the moving transforms for the given joint positions, then all fixed transforms.

    :param urdf_path: Path to the robot's URDF file
    :param positions_path: YAML file of joint positions (if None, every moving joint is at zero)
    :param stamp: Time (seconds) used to stamp the moving transforms
    :return: True if both batches of transforms were printed, else False
    """
    source = BodyDescriptionSource(try_load_body_description(urdf_path))
    publisher = RobotStatePublisher(
        source,
        tf_sink=ConsoleSink("Moving transforms (/tf)"),
        static_sink=ConsoleSink("Fixed transforms (/tf_static)"),
        clock=lambda: stamp,
    )
    if not publisher.init():
        log_error(f"Could not build a kinematic tree from {urdf_path}")
        return False

    if positions_path is None:
        positions = {joint_name: 0.0 for joint_name in publisher.segments.moving}
    else:
        positions = load_joint_positions(positions_path)

    positions, _ = publisher.expand_mimic_positions(positions)
    moving_status = publisher.publish_moving(positions, stamp)
    fixed_status = publisher.publish_fixed(use_static_channel=True)
    return moving_status == fixed_status == PublishStatus.PUBLISHED


@click.command()
@click.argument("urdf_path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--positions",
    "positions_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="YAML file with a 'joint_positions' dictionary (default: all joints at zero)",
)
@click.option("--stamp", type=float, default=0.0, help="Timestamp (seconds) of the printed transforms")
def main(urdf_path: Path, positions_path: Path | None, stamp: float) -> None:
    """Print the transforms between the frames of the robot described by the given URDF."""
    console.print(f"[yellow]Loading body description from {urdf_path}[/yellow]...")
    if not print_frames(urdf_path, positions_path, stamp):
        console.print("[red]Failed to print frames.[/red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
