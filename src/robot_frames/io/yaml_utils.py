"""Define utility functions for importing data from YAML files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from pathlib import Path


def load_yaml_data(yaml_path: Path, required_keys: set[str] | None = None) -> Any:
    """Load data from a YAML file into Python data structures.

    :param yaml_path: Path to the YAML file to be imported
    :param required_keys: Set of keys required to exist in the loaded data (if None, ignored)
    :return: Dictionary mapping strings to values, or a list of dictionaries, etc.
    :raises KeyError: If a required key is missing in the loaded data
    """
    if not yaml_path.exists():
        raise FileNotFoundError(f"Cannot load data from nonexistent YAML file: {yaml_path}")

    try:
        with yaml_path.open() as yaml_file:
            yaml_data: dict | list | None = yaml.safe_load(yaml_file)
    except yaml.YAMLError as error:
        raise RuntimeError(f"Failed to load from YAML file: {yaml_path}") from error

    if yaml_data is None:  # An empty file holds no data
        yaml_data = {}

    if required_keys is not None:
        for key in required_keys:
            if key not in yaml_data:
                raise KeyError(f"Required key '{key}' was missing in data loaded from {yaml_path}")

    return yaml_data


def load_joint_positions(yaml_path: Path) -> dict[str, float]:
    """Load a mapping from joint names to positions (rad or m) from a YAML file.

    The file holds a top-level `joint_positions` dictionary, e.g. `{joint_positions: {j1: 0.5}}`.
    """
    data = load_yaml_data(yaml_path, required_keys={"joint_positions"})
    positions = data["joint_positions"] or {}
    return {str(name): float(value) for name, value in positions.items()}
