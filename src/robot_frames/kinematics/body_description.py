"""Define classes to represent a robot's body description: its kinematic tree and joint data."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from robot_frames.kinematics.joints import JointModel, JointType

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True)
class MimicSpec:
    """Declares that a joint's position is a linear function of another joint's position."""

    joint: str
    """Name of the source joint whose position is mimicked."""

    multiplier: float = 1.0
    offset: float = 0.0


@dataclass(frozen=True)
class JointInfo:
    """Metadata about one joint of the body description."""

    name: str
    joint_type: JointType
    parent_link: str
    child_link: str
    mimic: MimicSpec | None = None


@dataclass
class TreeElement:
    """A named segment of the kinematic tree, attached to its parent through a joint."""

    name: str
    joint: JointModel
    children: list[TreeElement] = field(default_factory=list)

    def walk(self) -> Iterator[TreeElement]:
        """Iterate depth-first over this element and all of its descendants."""
        stack = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))


@dataclass(frozen=True)
class BodyDescription:
    """A snapshot of a robot's body: its kinematic tree and a flat table of joint metadata."""

    name: str
    root: TreeElement
    joints: dict[str, JointInfo]

    @property
    def joint_types(self) -> dict[str, JointType]:
        """Map each joint name to the joint's type in the body description."""
        return {name: info.joint_type for name, info in self.joints.items()}

    @classmethod
    def from_joints(
        cls,
        name: str,
        links: Iterable[str],
        joints: Iterable[tuple[JointInfo, JointModel]],
    ) -> BodyDescription:
        """Assemble a body description by connecting links through the given joints.

        :param name: Name of the robot
        :param links: Names of all links (rigid bodies) of the robot
        :param joints: Pairs of joint metadata and the joint's pose model
        :return: Constructed BodyDescription whose tree is rooted at the unique parentless link
        :raises ValueError: If the links do not form a single tree
        """
        link_names = list(links)
        joint_pairs = list(joints)

        children_of: dict[str, list[tuple[JointInfo, JointModel]]] = defaultdict(list)
        parent_of: dict[str, str] = {}
        for info, model in joint_pairs:
            if info.child_link in parent_of:
                raise ValueError(f"Link '{info.child_link}' has more than one parent joint.")
            parent_of[info.child_link] = info.parent_link
            children_of[info.parent_link].append((info, model))

        all_links = set(link_names) | set(parent_of) | set(parent_of.values())
        roots = sorted(all_links - set(parent_of))
        if len(roots) != 1:
            raise ValueError(f"Expected exactly one root link, found: {roots}")

        root = TreeElement(roots[0], JointModel.fixed(f"{roots[0]}_root_joint"))
        reached = {root.name}
        stack = [root]
        while stack:
            element = stack.pop()
            for info, model in children_of.get(element.name, []):
                child = TreeElement(info.child_link, model)
                element.children.append(child)
                reached.add(child.name)
                stack.append(child)

        unreached = all_links - reached
        if unreached:  # Links beneath a cycle can never be reached from the root
            raise ValueError(f"Links are not connected to root '{root.name}': {sorted(unreached)}")

        return cls(name, root, {info.name: info for info, _ in joint_pairs})
