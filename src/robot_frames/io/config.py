"""Define a Pydantic model for validating robot state publisher parameters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from robot_frames.io.yaml_utils import load_yaml_data

if TYPE_CHECKING:
    from pathlib import Path


class PublisherConfig(BaseModel):
    """Parameters controlling how often and where transforms are published."""

    publish_frequency: float = Field(default=50.0, gt=0, description="Max publish rate (Hz)")
    use_tf_static: bool = Field(default=True, description="Send fixed transforms latched, once")
    ignore_timestamp: bool = Field(default=False, description="Publish every joint state")
    missing_joint_warn_period_s: float = Field(
        default=10.0,
        gt=0,
        description="Minimum duration (seconds) between warnings about the same unknown joint",
    )

    model_config = ConfigDict(extra="forbid")

    @property
    def publish_interval_s(self) -> float:
        """Compute the minimum duration (seconds) between publishes of the same joint."""
        return 1.0 / self.publish_frequency

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> PublisherConfig:
        """Load and validate publisher parameters from the given YAML file.

        Parameters may be at the top level or nested under a `robot_state_publisher` key.

        :param yaml_path: Path to a YAML file of publisher parameters
        :return: Validated PublisherConfig instance
        :raises pydantic.ValidationError: If any parameter is unknown or out of range
        """
        yaml_data = load_yaml_data(yaml_path)
        if not isinstance(yaml_data, dict):
            raise TypeError(f"Expected a dictionary of parameters in {yaml_path}")

        params = yaml_data.get("robot_state_publisher", yaml_data)
        return cls.model_validate(params)
