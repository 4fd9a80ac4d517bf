from __future__ import annotations

from typing import Iterable, List, Optional, Union

from gamenight.errors import InvalidArgumentError

NAME_DELIMITER = ","
OWNER_SEPARATOR = NAME_DELIMITER + " "

OwnerInput = Union[str, Iterable[str], None]


def clean_name(name: Optional[str]) -> str:
    """
    Trim surrounding whitespace from a player or game name.
    """
    if name is None:
        return ""
    if not isinstance(name, str):
        raise InvalidArgumentError(f"Names must be text, got {name!r}.")
    return name.strip()


def name_key(name: Optional[str]) -> str:
    """
    Comparison key for names: trimmed and case-folded.
    """
    return clean_name(name).casefold()


def clean_player_name(name: Optional[str]) -> str:
    """
    Trim a single player name. Player names may not contain the delimiter,
    since owner lists are stored and sent comma-separated.
    """
    name = clean_name(name)
    if NAME_DELIMITER in name:
        raise InvalidArgumentError(f"Player names may not contain '{NAME_DELIMITER}': {name!r}.")
    return name


def split_names(raw: OwnerInput) -> List[str]:
    """
    Accept either a comma-delimited string or an iterable of names and
    return the trimmed, non-blank entries in their original order.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        names = [clean_name(part) for part in raw.split(NAME_DELIMITER)]
    else:
        try:
            parts = iter(raw)
        except TypeError as e:
            raise InvalidArgumentError(f"Expected a list of names, got {raw!r}.") from e
        names = [clean_player_name(part) for part in parts]
    return [name for name in names if name]


def unique_names(raw: OwnerInput) -> List[str]:
    """
    Like `split_names`, but drops case-insensitive duplicates.
    The first spelling of each name wins.
    """
    seen = set()
    result: List[str] = []
    for name in split_names(raw):
        key = name.casefold()
        if key in seen:
            continue
        seen.add(key)
        result.append(name)
    return result


def owner_keys(owners: Iterable[str]) -> set[str]:
    return {name_key(owner) for owner in owners}


def find_owner(owners: Iterable[str], name: str) -> Optional[str]:
    """
    Return the stored spelling of `name` in `owners`, or None.
    """
    key = name_key(name)
    for owner in owners:
        if name_key(owner) == key:
            return owner
    return None


def join_owners(owners: Iterable[str]) -> str:
    """
    Serialize an owner list for document metadata.
    """
    return OWNER_SEPARATOR.join(unique_names(owners))
