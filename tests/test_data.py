"""Tests for board data loading."""

import json

import pytest

from core.board import TransportGraph
from core.constants import Transport
from core.errors import BoardLoadError
from data.loader import (
    BoardLoader,
    resource_path,
    load_board,
    load_default_board,
    get_board_stats,
)


def minimal_board() -> dict:
    return {
        "nodes": [1, 2, 3],
        "edges": [[1, 2, "taxi"], [2, 3, "bus"], [2, 1, "underground"]],
    }


# =============================================================================
# Loading Tests
# =============================================================================

class TestBoardLoader:
    """Test loading valid boards."""

    def test_load_minimal_valid_board(self):
        graph = BoardLoader().load_from_dict(minimal_board())

        assert isinstance(graph, TransportGraph)
        assert graph.nodes() == frozenset({1, 2, 3})
        assert len(graph.edges) == 2

    def test_transports_accumulate(self):
        graph = BoardLoader().load_from_dict(minimal_board())

        assert graph.transports_between(1, 2) == frozenset({Transport.TAXI, Transport.UNDERGROUND})
        assert graph.transports_between(3, 2) == frozenset({Transport.BUS})

    def test_adjacency_built_correctly(self):
        graph = BoardLoader().load_from_dict(minimal_board())

        assert graph.adjacent_nodes(1) == frozenset({2})
        assert graph.adjacent_nodes(2) == frozenset({1, 3})

    def test_single_node_board(self):
        graph = BoardLoader().load_from_dict({"nodes": [7], "edges": []})
        assert graph.nodes() == frozenset({7})

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "board.json"
        path.write_text(json.dumps(minimal_board()), encoding="utf-8")

        graph = load_board(path)

        assert graph.nodes() == frozenset({1, 2, 3})

    def test_disconnected_allowed_when_not_required(self):
        data = {"nodes": [1, 2, 3, 4], "edges": [[1, 2, "taxi"], [3, 4, "taxi"]]}
        graph = BoardLoader(require_connected=False).load_from_dict(data)
        assert len(graph.nodes()) == 4


class TestBoardLoaderValidation:
    """Test rejection of malformed boards."""

    @pytest.mark.parametrize("data", [
        [],
        {"edges": []},
        {"nodes": [1]},
        {"nodes": 1, "edges": []},
        {"nodes": [1], "edges": {}},
        {"nodes": [], "edges": []},
    ])
    def test_bad_structure(self, data):
        with pytest.raises(BoardLoadError):
            BoardLoader().load_from_dict(data)

    @pytest.mark.parametrize("node_id", [-1, "1", True, 1.5])
    def test_invalid_node_id(self, node_id):
        with pytest.raises(BoardLoadError, match="Invalid node ID"):
            BoardLoader().load_from_dict({"nodes": [node_id], "edges": []})

    def test_duplicate_node_id(self):
        with pytest.raises(BoardLoadError, match="Duplicate node"):
            BoardLoader().load_from_dict({"nodes": [1, 1], "edges": []})

    def test_edge_unknown_node(self):
        with pytest.raises(BoardLoadError, match="unknown node"):
            BoardLoader().load_from_dict({"nodes": [1, 2], "edges": [[1, 3, "taxi"]]})

    def test_self_loop_edge(self):
        with pytest.raises(BoardLoadError, match="Self-loop"):
            BoardLoader().load_from_dict({"nodes": [1, 2], "edges": [[1, 1, "taxi"], [1, 2, "taxi"]]})

    def test_invalid_transport(self):
        with pytest.raises(BoardLoadError, match="Invalid transport"):
            BoardLoader().load_from_dict({"nodes": [1, 2], "edges": [[1, 2, "rocket"]]})

    @pytest.mark.parametrize("edge", [[1, 2], "1-2", [1, [2], "taxi"]])
    def test_malformed_edge(self, edge):
        with pytest.raises(BoardLoadError):
            BoardLoader().load_from_dict({"nodes": [1, 2], "edges": [edge]})

    def test_disconnected_graph(self):
        data = {"nodes": [1, 2, 3, 4], "edges": [[1, 2, "taxi"], [3, 4, "taxi"]]}
        with pytest.raises(BoardLoadError, match="not connected"):
            BoardLoader().load_from_dict(data)

    def test_missing_file(self, tmp_path):
        with pytest.raises(BoardLoadError, match="not found"):
            load_board(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "board.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(BoardLoadError, match="Invalid JSON"):
            load_board(path)


# =============================================================================
# Default Board Tests
# =============================================================================

class TestDefaultBoard:
    """Test the bundled board."""

    def test_loads(self):
        graph = load_default_board()
        assert len(graph.nodes()) == 24

    def test_has_every_transport(self):
        graph = load_default_board()
        for transport in Transport:
            assert graph.edges_with_transport(transport), transport

    def test_stats(self):
        stats = get_board_stats(load_default_board())

        assert stats["num_nodes"] == 24
        assert stats["edges_by_transport"]["ferry"] == 1
        assert stats["diameter"] is not None
        assert stats["max_degree"] >= 2


def test_stats_of_disconnected_board():
    graph = TransportGraph.from_edges([(1, 2, Transport.TAXI), (3, 4, Transport.BUS)])
    stats = get_board_stats(graph)

    assert stats["num_edges"] == 2
    assert stats["edges_by_transport"] == {"taxi": 1, "bus": 1, "underground": 0, "ferry": 0}
    assert stats["diameter"] is None


def test_resource_path_points_into_data_package():
    path = resource_path("default_board.json")
    assert path.parent.name == "data"
    assert path.is_file()
