"""Read-only snapshots of cluster topology returned by the topology collaborator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClusterHandle:
    """A resolved cluster reference."""

    name: str


@dataclass(frozen=True)
class NodeRef:
    """A member node of a cluster."""

    name: str


@dataclass(frozen=True)
class ResourceGroupView:
    """Current owner and state of a resource group at query time."""

    name: str
    owner_node: str
    state: str


@dataclass(frozen=True)
class ResourceView:
    """Current owner and state of a single resource at query time."""

    name: str
    owner_group: str
    owner_node: str
    state: str
