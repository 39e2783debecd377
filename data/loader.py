"""Board data loader for the Scotland Yard rules engine.

Loads and validates board topology from JSON files, converting them
into TransportGraph instances ready for use in the game.

File format:
    {
        "nodes": [1, 2, 3, ...],
        "edges": [[1, 2, "taxi"], [1, 3, "bus"], ...]
    }

Repeated node pairs accumulate transports.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any

import networkx as nx

from core.board import TransportGraph
from core.constants import Transport
from core.errors import BoardLoadError

logger = logging.getLogger(__name__)


def resource_path(relative_path: str) -> Path:
    """Get the absolute path of a file bundled in the data/ package."""
    return Path(__file__).parent / relative_path


class BoardLoader:
    """Loads and validates board data from JSON files."""

    def __init__(self, require_connected: bool = True):
        """Initialize the loader.

        Args:
            require_connected: If True, reject boards where some location
                cannot be reached from the others.
        """
        self.require_connected = require_connected

    def load_from_file(self, file_path: str | Path) -> TransportGraph:
        """Load a board from a JSON file.

        Args:
            file_path: Path to the JSON board file.

        Returns:
            A TransportGraph with the loaded topology.

        Raises:
            BoardLoadError: If the file cannot be read, parsed or validated.
        """
        path = Path(file_path)

        if not path.exists():
            raise BoardLoadError(f"Board file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise BoardLoadError(f"Invalid JSON in board file: {e}") from e
        except OSError as e:
            raise BoardLoadError(f"Error reading board file: {e}") from e

        graph = self.load_from_dict(data)
        logger.info(
            "Loaded board %s: %d nodes, %d edges",
            path.name, len(graph.nodes()), len(graph.edges),
        )
        return graph

    def load_from_dict(self, data: dict[str, Any]) -> TransportGraph:
        """Load a board from a dictionary.

        Args:
            data: Dictionary containing 'nodes' and 'edges' keys.

        Returns:
            A TransportGraph with the loaded topology.

        Raises:
            BoardLoadError: If validation fails.
        """
        self._validate_structure(data)

        G = nx.Graph()

        for node_id in data["nodes"]:
            if not isinstance(node_id, int) or isinstance(node_id, bool) or node_id < 0:
                raise BoardLoadError(f"Invalid node ID: {node_id!r}")
            if node_id in G:
                raise BoardLoadError(f"Duplicate node ID: {node_id}")
            G.add_node(node_id)

        for edge_data in data["edges"]:
            node_a, node_b, transport = self._parse_edge(edge_data)

            if node_a not in G:
                raise BoardLoadError(f"Edge references unknown node: {node_a}")
            if node_b not in G:
                raise BoardLoadError(f"Edge references unknown node: {node_b}")
            if node_a == node_b:
                raise BoardLoadError(f"Self-loop edge not allowed: [{node_a}, {node_b}]")

            if G.has_edge(node_a, node_b):
                G.edges[node_a, node_b]["transports"].add(transport)
            else:
                G.add_edge(node_a, node_b, transports={transport})

        self._validate_graph(G)

        return TransportGraph.from_networkx(G)

    def _validate_structure(self, data: dict[str, Any]) -> None:
        """Validate the basic structure of the board data."""
        if not isinstance(data, dict):
            raise BoardLoadError("Board data must be a dictionary")

        if "nodes" not in data:
            raise BoardLoadError("Board data missing 'nodes' key")

        if "edges" not in data:
            raise BoardLoadError("Board data missing 'edges' key")

        if not isinstance(data["nodes"], list):
            raise BoardLoadError("'nodes' must be a list")

        if not isinstance(data["edges"], list):
            raise BoardLoadError("'edges' must be a list")

        if len(data["nodes"]) == 0:
            raise BoardLoadError("Board must have at least one node")

    def _parse_edge(self, edge_data: Any) -> tuple[int, int, Transport]:
        """Parse an [a, b, transport] edge entry."""
        if not isinstance(edge_data, list) or len(edge_data) != 3:
            raise BoardLoadError(f"Edge must be [node_a, node_b, transport], got {edge_data!r}")

        node_a, node_b, transport_str = edge_data
        if not isinstance(node_a, int) or not isinstance(node_b, int):
            raise BoardLoadError(f"Edge endpoints must be node IDs, got {edge_data!r}")
        try:
            transport = Transport(transport_str)
        except ValueError:
            valid = ", ".join(t.value for t in Transport)
            raise BoardLoadError(
                f"Invalid transport '{transport_str}' on edge [{node_a}, {node_b}]. "
                f"Valid transports: {valid}"
            )
        return node_a, node_b, transport

    def _validate_graph(self, G: nx.Graph) -> None:
        """Validate the complete graph structure."""
        if self.require_connected and len(G) > 1 and not nx.is_connected(G):
            unreachable = set(G.nodes()) - nx.node_connected_component(G, next(iter(G)))
            raise BoardLoadError(
                f"Graph is not connected. Unreachable nodes: {sorted(unreachable)}"
            )


def load_board(file_path: str | Path, require_connected: bool = True) -> TransportGraph:
    """Convenience function to load a board from a file.

    Args:
        file_path: Path to the JSON board file.
        require_connected: If True, reject disconnected boards.

    Returns:
        A TransportGraph with the loaded topology.
    """
    loader = BoardLoader(require_connected=require_connected)
    return loader.load_from_file(file_path)


def load_default_board() -> TransportGraph:
    """Load the bundled board.

    Raises:
        BoardLoadError: If the default board file is missing or invalid.
    """
    default_path = resource_path("default_board.json")
    return load_board(default_path)


def get_board_stats(graph: TransportGraph) -> dict[str, Any]:
    """Get statistics about a board graph.

    Args:
        graph: The board graph to analyze.

    Returns:
        Dictionary with board statistics.
    """
    transport_counts: Counter[str] = Counter(
        transport.value
        for transports in graph.edges.values()
        for transport in transports
    )

    G = graph.to_networkx()
    diameter = nx.diameter(G) if len(G) > 0 and nx.is_connected(G) else None

    return {
        "num_nodes": len(graph.nodes()),
        "num_edges": len(graph.edges),
        "edges_by_transport": {t.value: transport_counts.get(t.value, 0) for t in Transport},
        "max_degree": max((len(ns) for ns in graph.adjacency.values()), default=0),
        "diameter": diameter,
    }
