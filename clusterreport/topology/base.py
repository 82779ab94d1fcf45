"""Topology collaborator contract."""

from __future__ import annotations

from typing import Protocol

from clusterreport.models.topology import ClusterHandle, NodeRef, ResourceGroupView, ResourceView


class ClusterTopology(Protocol):
    """Live view of cluster membership and resource state.

    ``resolve_cluster`` raises ClusterNotFound for an unknown cluster.  Any
    exception from the ``list_*`` methods is fatal for the report.
    """

    async def resolve_cluster(self, name: str) -> ClusterHandle: ...

    async def list_nodes(self, cluster: ClusterHandle) -> list[NodeRef]: ...

    async def list_resource_groups(self, cluster: ClusterHandle) -> list[ResourceGroupView]: ...

    async def list_resources(self, cluster: ClusterHandle, group: ResourceGroupView) -> list[ResourceView]: ...
