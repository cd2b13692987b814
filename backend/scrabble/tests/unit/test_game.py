"""Tests for the per-room session state machine."""

import random

import pytest

from scrabble.logic.board import BOARD_SIZE, CENTER, neighbors
from scrabble.logic.enums import GameErrorCode, GamePhase
from scrabble.logic.game import ScrabbleGame
from scrabble.logic.move import Placement
from scrabble.logic.settings import GameSettings
from scrabble.logic.tiles import NUM_TILES
from scrabble.tests.helpers.game import (
    TEST_SEED,
    col_cells,
    create_game,
    placements,
    put_on_board,
    row_cells,
    set_rack,
)


class TestRoster:
    def test_first_player_is_host(self):
        game = ScrabbleGame("room1", seed=TEST_SEED)

        assert game.add_player("p0", "Alice").success
        assert game.add_player("p1", "Bob").success

        assert game.host_id == "p0"
        assert [p.is_host for p in game.players] == [True, False]

    def test_blank_name_gets_default(self):
        game = create_game(num_players=1)

        game.add_player("p1", "   ")

        assert game.players[1].name == "Player 2"

    def test_fifth_player_rejected(self):
        game = create_game(num_players=4)

        result = game.add_player("p4", "Eve")

        assert not result.success
        assert result.code is GameErrorCode.ROOM_FULL
        assert game.player_count == 4

    def test_same_id_twice_rejected(self):
        game = create_game(num_players=1)

        result = game.add_player("p0", "Again")

        assert result.code is GameErrorCode.ALREADY_IN_ROOM
        assert game.player_count == 1

    def test_add_player_does_not_check_started(self):
        game = create_game(num_players=2, started=True)

        assert game.add_player("p2", "Late").success

    def test_custom_capacity(self):
        game = create_game(num_players=2, settings=GameSettings(max_players=2))

        assert game.is_full
        assert game.add_player("p2", "X").code is GameErrorCode.ROOM_FULL


class TestRemovePlayer:
    def test_unknown_player_is_noop(self):
        game = create_game(num_players=2)

        assert game.remove_player("nobody") is False
        assert game.player_count == 2

    def test_rack_returns_to_bag(self):
        game = create_game(num_players=2, started=True)
        bag_before = len(game.bag)

        game.remove_player("p1")

        assert len(game.bag) == bag_before + 7
        assert game.tiles_conserved()

    def test_host_handoff_to_next_in_roster_order(self):
        game = create_game(num_players=3)

        game.remove_player("p0")

        assert game.host_id == "p1"
        assert game.players[0].is_host
        assert sum(p.is_host for p in game.players) == 1

    def test_non_host_leaving_keeps_host(self):
        game = create_game(num_players=3)

        game.remove_player("p2")

        assert game.host_id == "p0"

    def test_last_player_leaves(self):
        game = create_game(num_players=1)

        game.remove_player("p0")

        assert game.is_empty
        assert game.host_id is None
        assert game.phase is GamePhase.EMPTY

    def test_turn_clamps_to_zero_when_out_of_range(self):
        game = create_game(num_players=3, started=True)
        game.current_turn = 2

        game.remove_player("p2")

        assert game.current_turn == 0

    def test_turn_index_kept_when_still_valid(self):
        game = create_game(num_players=3, started=True)
        game.current_turn = 1

        game.remove_player("p2")

        assert game.current_turn == 1

    def test_removing_earlier_player_can_shift_turn(self):
        game = create_game(num_players=3, started=True)
        game.current_turn = 1

        game.remove_player("p0")

        # index 1 now points at p2; p1's turn is skipped
        assert game.current_player is not None
        assert game.current_player.id == "p2"


class TestStartGame:
    def test_deals_racks(self):
        game = create_game(num_players=3)

        result = game.start_game()

        assert result.success
        assert game.started
        assert game.phase is GamePhase.ACTIVE
        assert all(p.tile_count == 7 for p in game.players)
        assert len(game.bag) == NUM_TILES - 21
        assert game.tiles_conserved()

    def test_needs_two_players(self):
        game = create_game(num_players=1)

        result = game.start_game()

        assert result.code is GameErrorCode.NOT_ENOUGH_PLAYERS
        assert not game.started
        assert game.players[0].tile_count == 0

    def test_only_once(self):
        game = create_game(num_players=2, started=True)

        result = game.start_game()

        assert result.code is GameErrorCode.GAME_ALREADY_STARTED
        assert all(p.tile_count == 7 for p in game.players)

    def test_lobby_phase(self):
        assert create_game(num_players=2).phase is GamePhase.LOBBY


class TestTurnGate:
    def test_not_in_game(self):
        game = create_game(num_players=2, started=True)

        assert game.pass_turn("stranger").code is GameErrorCode.NOT_IN_GAME

    def test_not_started(self):
        game = create_game(num_players=2)

        assert game.pass_turn("p0").code is GameErrorCode.GAME_NOT_STARTED
        assert game.play_move("p0", []).code is GameErrorCode.GAME_NOT_STARTED
        assert game.exchange_tiles("p0", []).code is GameErrorCode.GAME_NOT_STARTED

    def test_not_your_turn(self):
        game = create_game(num_players=2, started=True)

        result = game.play_move("p1", [])

        assert result.code is GameErrorCode.NOT_YOUR_TURN
        assert game.current_turn == 0

    def test_turn_rotation_wraps(self):
        game = create_game(num_players=3, started=True)

        order = []
        for _ in range(3):
            order.append(game.current_turn)
            assert game.pass_turn(game.players[game.current_turn].id).success

        assert order == [0, 1, 2]
        assert game.current_turn == 0


class TestPlayMove:
    def test_opening_move(self):
        game = create_game(num_players=2, started=True)
        tiles = set_rack(game, "p0", "CATEENS")

        result = game.play_move("p0", placements(tiles[:3], row_cells(7, 6, 3)))

        assert result.success
        assert result.score is not None
        assert result.score.total == 10
        player = game.get_player("p0")
        assert player.score == 10
        assert player.tile_count == 7
        assert all(t.id not in {x.id for x in tiles[:3]} for t in player.rack)
        assert game.board.get(7, 7) == tiles[1]
        assert game.opening_move_played
        assert game.current_turn == 1
        assert game.tiles_conserved()

    def test_vertical_opening_move(self):
        game = create_game(num_players=2, started=True)
        tiles = set_rack(game, "p0", "CATEENS")

        result = game.play_move("p0", placements(tiles[:3], col_cells(7, 6, 3)))

        assert result.success
        assert result.score.total == 10
        assert [game.board.get(r, 7) for r in (6, 7, 8)] == tiles[:3]

    def test_rejected_move_changes_nothing(self):
        game = create_game(num_players=2, started=True)
        tiles = set_rack(game, "p0", "CATEENS")
        rack_before = list(game.get_player("p0").rack)
        bag_before = game.bag.tiles

        result = game.play_move("p0", placements(tiles[:2], [(7, 8), (7, 10)]))

        assert result.code is GameErrorCode.FIRST_MOVE_NOT_ON_CENTER
        assert game.get_player("p0").rack == rack_before
        assert game.bag.tiles == bag_before
        assert game.board.is_empty
        assert game.current_turn == 0
        assert not game.opening_move_played

    def test_empty_move_rejected(self):
        game = create_game(num_players=2, started=True)

        assert game.play_move("p0", []).code is GameErrorCode.NO_TILES_PLAYED

    def test_forged_tile_rejected(self):
        game = create_game(num_players=2, started=True)

        result = game.play_move("p0", [Placement(row=7, col=7, tile_id="Z-0-forged")])

        assert result.code is GameErrorCode.TILE_NOT_IN_RACK

    def test_other_players_tile_rejected(self):
        game = create_game(num_players=2, started=True)
        other = game.get_player("p1").rack[0]

        result = game.play_move("p0", [Placement(row=7, col=7, tile_id=other.id)])

        assert result.code is GameErrorCode.TILE_NOT_IN_RACK

    def test_occupied_cell_rejected(self):
        game = create_game(num_players=2, started=True)
        put_on_board(game, 7, 7, "A")
        tile = game.get_player("p0").rack[0]

        result = game.play_move("p0", [Placement(row=7, col=7, tile_id=tile.id)])

        assert result.code is GameErrorCode.CELL_OCCUPIED
        assert game.tiles_conserved()

    def test_second_move_must_connect(self):
        game = create_game(num_players=2, started=True)
        put_on_board(game, 7, 7, "A")
        tiles = set_rack(game, "p0", "ON")

        result = game.play_move("p0", placements(tiles, row_cells(0, 0, 2)))

        assert result.code is GameErrorCode.NOT_CONNECTED

    def test_bridging_board_tile(self):
        game = create_game(num_players=2, started=True)
        put_on_board(game, 7, 7, "A")
        tiles = set_rack(game, "p0", "CT")

        result = game.play_move("p0", placements(tiles, [(7, 6), (7, 8)]))

        assert result.success
        assert result.score.total == 5

    def test_bingo(self):
        game = create_game(num_players=2, started=True)
        tiles = set_rack(game, "p0", "AEIOURS")

        result = game.play_move("p0", placements(tiles, row_cells(7, 4, 7)))

        assert result.score.bingo_bonus == 50
        assert result.score.total == 64

    def test_refill_limited_by_bag(self):
        game = create_game(num_players=2, started=True)
        tiles = set_rack(game, "p0", "CAT")
        game.bag.draw(len(game.bag) - 1)  # discard all but one tile from play
        remaining = len(game.bag)

        game.play_move("p0", placements(tiles, row_cells(7, 6, 3)))

        assert remaining == 1
        assert game.get_player("p0").tile_count == 1
        assert len(game.bag) == 0


class TestExchange:
    def test_exchange_replaces_tiles(self):
        game = create_game(num_players=2, started=True)
        rack = list(game.get_player("p0").rack)
        swap = [t.id for t in rack[:3]]

        result = game.exchange_tiles("p0", swap)

        assert result.success
        assert result.exchanged == 3
        player = game.get_player("p0")
        assert player.tile_count == 7
        assert game.current_turn == 1
        assert game.tiles_conserved()

    def test_unknown_ids_are_skipped(self):
        game = create_game(num_players=2, started=True)
        real = game.get_player("p0").rack[0].id

        result = game.exchange_tiles("p0", [real, "nope-1", "nope-2"])

        assert result.success
        assert result.exchanged == 1
        assert game.get_player("p0").tile_count == 7
        assert game.tiles_conserved()

    def test_empty_exchange_still_advances_turn(self):
        game = create_game(num_players=2, started=True)

        result = game.exchange_tiles("p0", [])

        assert result.success
        assert result.exchanged == 0
        assert game.current_turn == 1

    def test_not_enough_tiles_in_bag(self):
        game = create_game(num_players=2, started=True)
        game.bag.draw(len(game.bag) - 2)
        rack_ids = [t.id for t in game.get_player("p0").rack[:3]]

        result = game.exchange_tiles("p0", rack_ids)

        assert result.code is GameErrorCode.NOT_ENOUGH_TILES
        assert game.current_turn == 0

    def test_bag_check_counts_requested_ids(self):
        game = create_game(num_players=2, started=True)
        game.bag.draw(len(game.bag) - 1)

        result = game.exchange_tiles("p0", ["bogus-1", "bogus-2"])

        assert result.code is GameErrorCode.NOT_ENOUGH_TILES


def _legal_single_tile_cell(game: ScrabbleGame) -> tuple[int, int] | None:
    if game.board.is_empty:
        return CENTER
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if game.board.is_occupied(row, col):
                for cell in neighbors(row, col):
                    if not game.board.is_occupied(*cell):
                        return cell
    return None


class TestTileConservation:
    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_random_operation_sequence(self, seed):
        rng = random.Random(seed)
        game = create_game(num_players=4, started=True)
        next_id = 4

        for _ in range(200):
            if game.is_empty:
                break
            player = game.current_player
            choice = rng.random()
            if choice < 0.4 and player.rack:
                cell = _legal_single_tile_cell(game)
                if cell is not None:
                    tile = rng.choice(player.rack)
                    assert game.play_move(player.id, [Placement(row=cell[0], col=cell[1], tile_id=tile.id)]).success
            elif choice < 0.6:
                ids = [t.id for t in rng.sample(player.rack, k=min(len(player.rack), rng.randint(0, 3)))]
                ids.append("unknown")
                game.exchange_tiles(player.id, ids)
            elif choice < 0.8:
                game.pass_turn(player.id)
            elif choice < 0.9:
                game.remove_player(rng.choice(game.players).id)
            else:
                game.add_player(f"p{next_id}", "")
                next_id += 1

            assert game.tiles_conserved()
            assert len(game.all_tiles()) == NUM_TILES
            if game.players:
                assert 0 <= game.current_turn < game.player_count
                assert sum(p.is_host for p in game.players) == 1
