import pytest

from gamenight.errors import InvalidArgumentError
from gamenight.utils.names import (
    clean_name,
    clean_player_name,
    find_owner,
    join_owners,
    name_key,
    split_names,
    unique_names,
)


def test_clean_name_trims_and_handles_none():
    assert clean_name("  Alice \n") == "Alice"
    assert clean_name(None) == ""


def test_name_key_is_case_insensitive():
    assert name_key(" ALICE ") == name_key("alice")


def test_split_names_accepts_strings_and_lists():
    assert split_names("Alice, Bob,, ,Charlie ") == ["Alice", "Bob", "Charlie"]
    assert split_names([" Alice", "", "Bob "]) == ["Alice", "Bob"]
    assert split_names(None) == []


def test_unique_names_keeps_first_spelling():
    assert unique_names(["Alice", "bob", "ALICE", "Bob "]) == ["Alice", "bob"]


def test_find_owner_returns_stored_spelling():
    owners = ["Alice", "Bob"]

    assert find_owner(owners, " bob ") == "Bob"
    assert find_owner(owners, "Charlie") is None


def test_join_owners_serializes_deduplicated_list():
    assert join_owners(["Alice", " alice", "Bob"]) == "Alice, Bob"
    assert join_owners([]) == ""


def test_list_entries_may_not_contain_the_delimiter():
    with pytest.raises(InvalidArgumentError):
        split_names(["Alice", "Smith, John"])


def test_delimited_string_is_still_split():
    assert split_names("Smith, John") == ["Smith", "John"]


def test_clean_player_name_rejects_delimiter():
    assert clean_player_name("  Bob ") == "Bob"
    with pytest.raises(InvalidArgumentError):
        clean_player_name("Smith, John")


def test_non_text_names_are_invalid():
    with pytest.raises(InvalidArgumentError):
        clean_name(123)
    with pytest.raises(InvalidArgumentError):
        split_names(7)
