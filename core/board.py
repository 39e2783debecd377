"""Transport graph model for the Scotland Yard rules engine.

The board is a static undirected graph:
- Nodes are locations (small positive integers on the standard map)
- Edges carry one or more transport modes
- Topology is immutable; the game only ever queries it
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

import networkx as nx

from .constants import Transport


# Type aliases for clarity
NodeId = int
EdgeId = tuple[int, int]  # Canonical form: (min_id, max_id)


def make_edge_id(node_a: int, node_b: int) -> EdgeId:
    """Create a canonical edge ID from two node IDs.

    Edge IDs are always stored with the smaller node ID first
    to ensure consistent lookups regardless of direction.
    """
    return (min(node_a, node_b), max(node_a, node_b))


@dataclass(frozen=True)
class TransportGraph:
    """The game board as an undirected, transport-labelled graph.

    Attributes:
        edges: Mapping from canonical edge ID to the transports on that edge.
        adjacency: Mapping from node ID to the set of adjacent node IDs.
    """

    edges: Mapping[EdgeId, frozenset[Transport]] = field(default_factory=dict)
    adjacency: Mapping[NodeId, frozenset[NodeId]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "edges", MappingProxyType(dict(self.edges)))
        object.__setattr__(self, "adjacency", MappingProxyType(dict(self.adjacency)))

    def __hash__(self) -> int:
        return hash((frozenset(self.edges.items()), frozenset(self.adjacency.items())))

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[NodeId, NodeId, Transport]],
        nodes: Iterable[NodeId] = (),
    ) -> TransportGraph:
        """Build a graph from (node_a, node_b, transport) triples.

        Repeated pairs accumulate transports. Extra isolated nodes may be
        passed through ``nodes``.
        """
        labels: dict[EdgeId, set[Transport]] = {}
        adjacency: dict[NodeId, set[NodeId]] = {node_id: set() for node_id in nodes}

        for node_a, node_b, transport in edges:
            if node_a == node_b:
                raise ValueError(f"Self-loop edge not allowed: [{node_a}, {node_b}]")
            labels.setdefault(make_edge_id(node_a, node_b), set()).add(transport)
            adjacency.setdefault(node_a, set()).add(node_b)
            adjacency.setdefault(node_b, set()).add(node_a)

        return cls(
            edges={edge_id: frozenset(modes) for edge_id, modes in labels.items()},
            adjacency={node_id: frozenset(ns) for node_id, ns in adjacency.items()},
        )

    @classmethod
    def from_networkx(cls, graph: nx.Graph) -> TransportGraph:
        """Build a graph from a NetworkX graph.

        Each edge must carry a ``transports`` attribute holding an iterable
        of Transport values.
        """
        triples = [
            (u, v, transport)
            for u, v, transports in graph.edges(data="transports", default=())
            for transport in transports
        ]
        return cls.from_edges(triples, nodes=graph.nodes())

    def to_networkx(self) -> nx.Graph:
        """Convert to a NetworkX graph with a ``transports`` edge attribute."""
        G = nx.Graph()
        G.add_nodes_from(self.adjacency)
        for (node_a, node_b), transports in self.edges.items():
            G.add_edge(node_a, node_b, transports=transports)
        return G

    def nodes(self) -> frozenset[NodeId]:
        """Return every location on the board."""
        return frozenset(self.adjacency)

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self.adjacency

    def is_empty(self) -> bool:
        """Check if the board has no locations at all."""
        return not self.adjacency

    def adjacent_nodes(self, node_id: NodeId) -> frozenset[NodeId]:
        """Get all nodes adjacent to a given node."""
        return self.adjacency.get(node_id, frozenset())

    def transports_between(self, node_a: NodeId, node_b: NodeId) -> frozenset[Transport]:
        """Get the transports connecting two nodes (empty if not adjacent)."""
        return self.edges.get(make_edge_id(node_a, node_b), frozenset())

    def edges_with_transport(self, transport: Transport) -> list[EdgeId]:
        """Return all edges that can be travelled with a given transport."""
        return [
            edge_id for edge_id, transports in self.edges.items()
            if transport in transports
        ]
