"""Define a command-line interface to check parameters and resolve marker destinations."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from marker_navigation.io.logging import console
from marker_navigation.io.pydantic_schemata import ConfigurationError, load_config
from marker_navigation.kinematics import FrameTree
from marker_navigation.navigation import DestinationCatalog, GoalResolver, UnknownMarkerId
from marker_navigation.transforms import FrameUnavailable, LocalFrameGraph

EXISTING_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.group()
def cli() -> None:
    """Resolve navigation goals from detected markers."""


@cli.command("check-config")
@click.argument("params_yaml", type=EXISTING_FILE)
def check_config(params_yaml: Path) -> None:
    """Validate the parameters in PARAMS_YAML and display the destination catalog."""
    try:
        config = load_config(params_yaml)
    except ConfigurationError as error:
        raise click.ClickException(str(error)) from error

    catalog = DestinationCatalog.from_config(config)
    x, y = catalog.initial_goal
    console.print(f"Initial search goal: ({x}, {y}) in '{config.working_frame}'")

    table = Table(title=f"Destinations in '{catalog.frame_id}'")
    table.add_column("Marker ID", justify="right")
    table.add_column("x (m)", justify="right")
    table.add_column("y (m)", justify="right")
    for marker_id in catalog.marker_ids:
        entry = catalog.lookup(marker_id)
        table.add_row(str(marker_id), f"{entry.x:.3f}", f"{entry.y:.3f}")

    console.print(table)


@cli.command("resolve")
@click.argument("params_yaml", type=EXISTING_FILE)
@click.argument("marker_id", type=int)
@click.option(
    "--frames",
    "frames_yaml",
    type=EXISTING_FILE,
    default=None,
    help="YAML file of fixed frames (e.g., the relation between 'map' and 'odom').",
)
@click.option(
    "--working-frame",
    type=str,
    default=None,
    help="Frame of the resolved goal (defaults to the configured working frame).",
)
def resolve(
    params_yaml: Path,
    marker_id: int,
    frames_yaml: Path | None,
    working_frame: str | None,
) -> None:
    """Resolve the destination of MARKER_ID using the parameters in PARAMS_YAML."""
    try:
        config = load_config(params_yaml)
    except ConfigurationError as error:
        raise click.ClickException(str(error)) from error

    tree = FrameTree.from_yaml(frames_yaml) if frames_yaml is not None else FrameTree()
    frame_graph = LocalFrameGraph.from_frame_tree(tree, timeout_s=config.frame_lookup_timeout_s)
    resolver = GoalResolver(
        DestinationCatalog.from_config(config),
        frame_graph,
        destination_frame=config.destination_frame,
    )

    try:
        goal = resolver.resolve(marker_id, working_frame or config.working_frame)
    except (UnknownMarkerId, FrameUnavailable) as error:
        raise click.ClickException(str(error)) from error

    console.print(f"Goal: ({goal.x:.3f}, {goal.y:.3f}) in '{goal.ref_frame}'")


if __name__ == "__main__":
    cli()
