"""Tests for legal move generation.

Tests cover:
1. Single moves: tickets, transports, blocking by detectives
2. Secret tickets and ferries
3. Double moves and their ticket requirements
4. Turn handling (Mr X vs. detectives still to move)
"""

import pytest

from core.board import TransportGraph
from core.constants import Piece, Ticket, Transport
from core.game_setup import GameSetup
from core.move import SingleMove, DoubleMove, LogEntry
from core.player import Player
from engine.moves import make_single_moves, make_double_moves, make_moves


def make_setup(edges, rounds=(False, False, False)) -> GameSetup:
    return GameSetup(TransportGraph.from_edges(edges), rounds)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def path_setup() -> GameSetup:
    """Path 1-2-3 by taxi, with a bus spur 3-4."""
    return make_setup([
        (1, 2, Transport.TAXI),
        (2, 3, Transport.TAXI),
        (3, 4, Transport.BUS),
    ])


# =============================================================================
# Single Move Tests
# =============================================================================


class TestSingleMoves:
    """Test single move enumeration."""

    def test_one_taxi_edge(self):
        """Mr X with one taxi ticket next to a taxi edge has exactly one move."""
        setup = make_setup([(1, 2, Transport.TAXI), (3, 4, Transport.TAXI)])
        mrx = Player(Piece.MRX, {Ticket.TAXI: 1}, 1)
        red = Player(Piece.RED, {Ticket.BUS: 1}, 4)

        moves = make_moves(setup, mrx, [red], frozenset({Piece.MRX}), ())

        assert moves == {SingleMove(Piece.MRX, 1, Ticket.TAXI, 2)}

    def test_requires_ticket(self, path_setup: GameSetup):
        """No ticket for the edge's transport, no move."""
        player = Player(Piece.RED, {Ticket.BUS: 3}, 2)
        assert make_single_moves(path_setup, [player], player, 2) == frozenset()

    def test_one_move_per_transport(self):
        """An edge with two transports yields one move per affordable ticket."""
        setup = make_setup([(1, 2, Transport.TAXI), (1, 2, Transport.BUS)])
        player = Player(Piece.RED, {Ticket.TAXI: 1, Ticket.BUS: 1}, 1)

        moves = make_single_moves(setup, [player], player, 1)

        assert moves == {
            SingleMove(Piece.RED, 1, Ticket.TAXI, 2),
            SingleMove(Piece.RED, 1, Ticket.BUS, 2),
        }

    def test_detective_blocks_destination(self, path_setup: GameSetup):
        """Nobody may land on a node occupied by a detective."""
        mrx = Player(Piece.MRX, {Ticket.TAXI: 5}, 2)
        red = Player(Piece.RED, {Ticket.TAXI: 5}, 3)

        moves = make_single_moves(path_setup, [red], mrx, 2)

        assert moves == {SingleMove(Piece.MRX, 2, Ticket.TAXI, 1)}

    def test_detective_blocked_by_other_detective(self, path_setup: GameSetup):
        red = Player(Piece.RED, {Ticket.TAXI: 5}, 1)
        blue = Player(Piece.BLUE, {Ticket.TAXI: 5}, 2)

        assert make_single_moves(path_setup, [red, blue], red, 1) == frozenset()

    def test_detective_may_land_on_mrx(self, path_setup: GameSetup):
        """Mr X's location is not blocked; that is how he gets caught."""
        red = Player(Piece.RED, {Ticket.TAXI: 1}, 1)
        moves = make_single_moves(path_setup, [red], red, 1)
        assert SingleMove(Piece.RED, 1, Ticket.TAXI, 2) in moves

    def test_uses_given_source(self, path_setup: GameSetup):
        """The source argument, not the player's location, is the origin."""
        mrx = Player(Piece.MRX, {Ticket.BUS: 1}, 1)
        moves = make_single_moves(path_setup, [], mrx, 3)
        assert moves == {SingleMove(Piece.MRX, 3, Ticket.BUS, 4)}


class TestSecretTickets:
    """Test secret tickets and ferries."""

    def test_secret_on_any_edge(self, path_setup: GameSetup):
        """A secret ticket covers every adjacent edge, whatever the transport."""
        mrx = Player(Piece.MRX, {Ticket.SECRET: 1}, 3)

        moves = make_single_moves(path_setup, [], mrx, 3)

        assert moves == {
            SingleMove(Piece.MRX, 3, Ticket.SECRET, 2),
            SingleMove(Piece.MRX, 3, Ticket.SECRET, 4),
        }

    def test_secret_alongside_regular_ticket(self, path_setup: GameSetup):
        mrx = Player(Piece.MRX, {Ticket.TAXI: 1, Ticket.SECRET: 1}, 1)

        moves = make_single_moves(path_setup, [], mrx, 1)

        assert moves == {
            SingleMove(Piece.MRX, 1, Ticket.TAXI, 2),
            SingleMove(Piece.MRX, 1, Ticket.SECRET, 2),
        }

    def test_ferry_needs_secret(self):
        """Ferry edges can only be travelled with a secret ticket."""
        setup = make_setup([(1, 2, Transport.FERRY)])
        mrx = Player(Piece.MRX, {Ticket.TAXI: 4, Ticket.SECRET: 1}, 1)

        moves = make_single_moves(setup, [], mrx, 1)

        # The ferry's required ticket and the secret-on-any-edge rule
        # produce the same move, which the set keeps once
        assert moves == {SingleMove(Piece.MRX, 1, Ticket.SECRET, 2)}

    def test_detective_cannot_take_ferry(self):
        setup = make_setup([(1, 2, Transport.FERRY)])
        red = Player(Piece.RED, {Ticket.TAXI: 4, Ticket.BUS: 4}, 1)
        assert make_single_moves(setup, [red], red, 1) == frozenset()


# =============================================================================
# Double Move Tests
# =============================================================================


class TestDoubleMoves:
    """Test double move generation."""

    def test_double_move_along_path(self, path_setup: GameSetup):
        """Double ticket plus two taxis on 1-2-3 allows 1 -> 2 -> 3."""
        mrx = Player(Piece.MRX, {Ticket.DOUBLE: 1, Ticket.TAXI: 2}, 1)

        moves = make_moves(path_setup, mrx, [], frozenset({Piece.MRX}), ())

        assert moves == {
            SingleMove(Piece.MRX, 1, Ticket.TAXI, 2),
            DoubleMove(Piece.MRX, 1, Ticket.TAXI, 2, Ticket.TAXI, 3),
            DoubleMove(Piece.MRX, 1, Ticket.TAXI, 2, Ticket.TAXI, 1),
        }

    def test_same_ticket_twice_needs_two(self, path_setup: GameSetup):
        """One taxi ticket cannot pay for both legs."""
        mrx = Player(Piece.MRX, {Ticket.DOUBLE: 1, Ticket.TAXI: 1}, 1)

        moves = make_moves(path_setup, mrx, [], frozenset({Piece.MRX}), ())

        assert moves == {SingleMove(Piece.MRX, 1, Ticket.TAXI, 2)}

    def test_different_tickets_need_one_each(self, path_setup: GameSetup):
        mrx = Player(Piece.MRX, {Ticket.DOUBLE: 1, Ticket.TAXI: 1, Ticket.BUS: 1}, 2)

        doubles = {
            m for m in make_moves(path_setup, mrx, [], frozenset({Piece.MRX}), ())
            if isinstance(m, DoubleMove)
        }

        assert doubles == {DoubleMove(Piece.MRX, 2, Ticket.TAXI, 3, Ticket.BUS, 4)}

    def test_no_double_without_double_ticket(self, path_setup: GameSetup):
        mrx = Player(Piece.MRX, {Ticket.TAXI: 5}, 1)
        moves = make_moves(path_setup, mrx, [], frozenset({Piece.MRX}), ())
        assert not any(isinstance(m, DoubleMove) for m in moves)

    def test_no_double_in_last_round(self, path_setup: GameSetup):
        """A double move needs two rounds left in the schedule."""
        mrx = Player(Piece.MRX, {Ticket.DOUBLE: 1, Ticket.TAXI: 5}, 1)
        log = (LogEntry.hidden(Ticket.TAXI), LogEntry.hidden(Ticket.TAXI))

        moves = make_moves(path_setup, mrx, [], frozenset({Piece.MRX}), log)

        assert moves == {SingleMove(Piece.MRX, 1, Ticket.TAXI, 2)}

    def test_second_leg_blocked_by_detective(self, path_setup: GameSetup):
        mrx = Player(Piece.MRX, {Ticket.DOUBLE: 1, Ticket.TAXI: 2}, 1)
        red = Player(Piece.RED, {Ticket.BUS: 1}, 3)

        doubles = make_double_moves(
            path_setup, [red], mrx, [SingleMove(Piece.MRX, 1, Ticket.TAXI, 2)]
        )

        assert doubles == {DoubleMove(Piece.MRX, 1, Ticket.TAXI, 2, Ticket.TAXI, 1)}


# =============================================================================
# Turn Tests
# =============================================================================


class TestTurns:
    """Test which side's moves are generated."""

    @pytest.fixture
    def star_setup(self) -> GameSetup:
        """Hub 1 with taxi spokes to 2, 3, 4, 5."""
        return make_setup([(1, n, Transport.TAXI) for n in (2, 3, 4, 5)])

    def test_detectives_turn_unions_remaining(self, star_setup: GameSetup):
        mrx = Player(Piece.MRX, {Ticket.TAXI: 5}, 5)
        red = Player(Piece.RED, {Ticket.TAXI: 1}, 2)
        blue = Player(Piece.BLUE, {Ticket.TAXI: 1}, 3)

        moves = make_moves(
            star_setup, mrx, [red, blue], frozenset({Piece.RED, Piece.BLUE}), ()
        )

        assert moves == {
            SingleMove(Piece.RED, 2, Ticket.TAXI, 1),
            SingleMove(Piece.BLUE, 3, Ticket.TAXI, 1),
        }

    def test_detectives_who_moved_are_skipped(self, star_setup: GameSetup):
        mrx = Player(Piece.MRX, {Ticket.TAXI: 5}, 5)
        red = Player(Piece.RED, {Ticket.TAXI: 1}, 2)
        blue = Player(Piece.BLUE, {Ticket.TAXI: 1}, 3)

        moves = make_moves(star_setup, mrx, [red, blue], frozenset({Piece.BLUE}), ())

        assert moves == {SingleMove(Piece.BLUE, 3, Ticket.TAXI, 1)}

    def test_mrx_turn_has_no_detective_moves(self, star_setup: GameSetup):
        mrx = Player(Piece.MRX, {Ticket.TAXI: 5}, 5)
        red = Player(Piece.RED, {Ticket.TAXI: 1}, 2)

        moves = make_moves(star_setup, mrx, [red], frozenset({Piece.MRX}), ())

        assert all(m.commenced_by is Piece.MRX for m in moves)
        assert moves == {SingleMove(Piece.MRX, 5, Ticket.TAXI, 1)}
