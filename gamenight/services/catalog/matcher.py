from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from gamenight.dtos.game_dtos import GameDTO
from gamenight.errors import InvalidArgumentError
from gamenight.utils.names import owner_keys, unique_names

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayableGame:
    game: GameDTO
    matched_owners: Tuple[str, ...]


def normalize_players(players: Iterable[str]) -> List[str]:
    """
    Trim the requested names and drop blanks and case-insensitive repeats.
    A single string is read as a comma-separated list of names.
    Raises InvalidArgumentError when nobody is left.
    """
    normalized = unique_names(players)
    if not normalized:
        raise InvalidArgumentError("At least one player name is required.")
    return normalized


def matched_owners(game: GameDTO, players: Sequence[str]) -> Tuple[str, ...]:
    """
    Requested players (in request order) who own `game`.
    """
    keys = owner_keys(game.owners)
    return tuple(player for player in players if player.casefold() in keys)


def is_playable(game: GameDTO, group_size: int, owners_in_group: int) -> bool:
    if game.capacity < group_size:
        return False
    if game.full_party_only and group_size != game.capacity:
        return False
    if game.remote_play_enabled:
        return owners_in_group >= 1
    return owners_in_group == group_size


def find_playable_games(
    players: Iterable[str],
    catalog: Iterable[GameDTO],
) -> List[PlayableGame]:
    """
    Filter `catalog` down to the games the requested group can play together.

    A game qualifies when it seats the whole group, when its full-party rule
    (if set) is met exactly, and when the group owns it: every player for
    local games, at least one player for remote-play games. Each result
    carries the requested players who own it. Results are ordered by name,
    case-insensitively.
    """
    group = normalize_players(players)
    group_size = len(group)

    playable: List[PlayableGame] = []
    for game in catalog:
        owners = matched_owners(game, group)
        if is_playable(game, group_size, len(owners)):
            playable.append(PlayableGame(game=game, matched_owners=owners))

    playable.sort(key=lambda item: item.game.name.casefold())
    logger.debug("%d playable game(s) for %s", len(playable), group)
    return playable
