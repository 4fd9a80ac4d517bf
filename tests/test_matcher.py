"""
Tests for the playable-games matcher.
"""

import pytest

from gamenight.errors import InvalidArgumentError
from gamenight.services.catalog import find_playable_games, normalize_players

from .conftest import make_game


def names(results):
    return [item.game.name for item in results]


class TestScenarios:
    def test_mixed_case_group_matches_local_and_remote_games(self, scenario_catalog):
        results = find_playable_games(["alice", "BOB"], scenario_catalog)

        assert names(results) == ["Ace", "Zelda"]

    def test_player_owning_nothing_gets_nothing(self, scenario_catalog):
        assert find_playable_games(["Charlie"], scenario_catalog) == []

    def test_full_party_game_needs_exact_group_size(self):
        game = make_game("Trio", 3, ["Alice", "Bob", "Charlie"], full_party=True)

        assert find_playable_games(["Alice", "Bob"], [game]) == []
        assert names(find_playable_games(["Alice", "Bob", "Charlie"], [game])) == ["Trio"]

    def test_capacity_excludes_group_that_does_not_fit(self):
        game = make_game("Solo", 1, ["Alice", "Bob"], remote=True)

        assert find_playable_games(["Alice", "Bob"], [game]) == []


class TestOwnership:
    def test_local_game_requires_every_player(self):
        game = make_game("Zelda", 4, ["Alice", "Bob"])

        assert find_playable_games(["Alice", "Charlie"], [game]) == []

    def test_remote_game_requires_one_owner(self):
        game = make_game("Ace", 4, ["Alice"], remote=True)

        results = find_playable_games(["Charlie", "alice"], [game])

        assert names(results) == ["Ace"]

    def test_remote_game_with_no_owner_in_group_is_excluded(self):
        game = make_game("Ace", 4, ["Alice"], remote=True)

        assert find_playable_games(["Bob", "Charlie"], [game]) == []

    def test_names_are_trimmed_before_comparison(self):
        game = make_game("Zelda", 2, ["Alice", "Bob"])

        assert names(find_playable_games(["  alice ", "bob\t"], [game])) == ["Zelda"]

    def test_stored_owner_whitespace_is_ignored(self):
        game = make_game("Zelda", 2, [" Alice ", "Bob"])

        assert names(find_playable_games(["Alice", "Bob"], [game])) == ["Zelda"]


class TestMatchedOwners:
    def test_matched_owners_lists_requesting_owners_for_remote_games(self):
        game = make_game("Ace", 4, ["Alice", "Dana"], remote=True)

        [result] = find_playable_games(["Bob", "Alice", "Charlie"], [game])

        assert result.matched_owners == ("Alice",)

    def test_matched_owners_keeps_request_order_and_spelling(self):
        game = make_game("Zelda", 3, ["Alice", "Bob"])

        [result] = find_playable_games(["bob", "ALICE"], [game])

        assert result.matched_owners == ("bob", "ALICE")


class TestGroupNormalization:
    def test_empty_group_is_rejected(self, scenario_catalog):
        with pytest.raises(InvalidArgumentError):
            find_playable_games([], scenario_catalog)

    def test_blank_names_only_is_rejected(self, scenario_catalog):
        with pytest.raises(InvalidArgumentError):
            find_playable_games(["", "   "], scenario_catalog)

    def test_repeated_names_count_once(self):
        game = make_game("Duo", 2, ["Alice", "Bob"], full_party=True)

        assert normalize_players(["Alice", "alice ", "Bob"]) == ["Alice", "Bob"]
        assert normalize_players("Alice, alice ,Bob") == ["Alice", "Bob"]
        assert names(find_playable_games(["Alice", "alice ", "Bob"], [game])) == ["Duo"]


class TestOrderingAndPurity:
    def test_results_sorted_case_insensitively(self):
        catalog = [
            make_game("zelda", 4, ["Alice"]),
            make_game("Ace", 4, ["Alice"]),
            make_game("mario kart", 4, ["Alice"]),
            make_game("Bomberman", 4, ["Alice"]),
        ]

        results = find_playable_games(["Alice"], catalog)

        assert names(results) == ["Ace", "Bomberman", "mario kart", "zelda"]

    def test_repeated_calls_give_identical_results(self, scenario_catalog):
        first = find_playable_games(["Alice", "Bob"], scenario_catalog)
        second = find_playable_games(["Bob", "Alice"], scenario_catalog)

        assert names(first) == names(second)

    def test_catalog_is_not_modified(self, scenario_catalog):
        before = [game.model_dump() for game in scenario_catalog]

        find_playable_games(["alice", "bob"], scenario_catalog)

        assert [game.model_dump() for game in scenario_catalog] == before
        assert [game.name for game in scenario_catalog] == ["Zelda", "Ace"]


def test_every_result_satisfies_the_group_rules():
    catalog = [
        make_game(f"Game {capacity}-{remote}-{full}", capacity, owners, remote=remote, full_party=full)
        for capacity in (1, 2, 3, 4)
        for owners in (["Alice"], ["Alice", "Bob"], ["Alice", "Bob", "Charlie"], [])
        for remote in (False, True)
        for full in (False, True)
    ]
    groups = [["Alice"], ["Alice", "Bob"], ["Bob", "Charlie"], ["Alice", "Bob", "Charlie"]]

    for group in groups:
        keys = {p.casefold() for p in group}
        for result in find_playable_games(group, catalog):
            game = result.game
            owner_keys = {o.casefold() for o in game.owners}
            assert game.capacity >= len(group)
            if game.full_party_only:
                assert game.capacity == len(group)
            if game.remote_play_enabled:
                assert keys & owner_keys
            else:
                assert keys <= owner_keys


def test_single_string_group_is_split_on_commas():
    game = make_game("Duo", 2, ["Alice", "Bob"], full_party=True)

    assert normalize_players("Alice") == ["Alice"]
    assert names(find_playable_games("Alice, Bob", [game])) == ["Duo"]
