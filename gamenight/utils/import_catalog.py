"""
Bulk import of games from a JSON file.

Usage:
    python -m gamenight.utils.import_catalog games.json [--backend memory|chroma]

The file holds a JSON array of objects with `name`, `capacity`, `owners`
(a list or a comma-separated string) and the optional `full_party_only` and
`remote_play_enabled` flags. The legacy keys `game`, `players` and `gamers`
are accepted in place of `name`, `capacity` and `owners`.
"""
import argparse
import json
import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Dict, List, Tuple

from pydantic import ValidationError
from tqdm import tqdm

from gamenight.config.config import Config
from gamenight.dtos.game_dtos import CreateGameRequest
from gamenight.errors import CatalogError
from gamenight.repositories import CatalogStore
from gamenight.services.game_service import GameService
from gamenight.utils.chroma_setup import SUPPORTED_BACKENDS, get_document_store

logger = logging.getLogger(__name__)

LEGACY_KEYS = {"game": "name", "players": "capacity", "gamers": "owners"}
GAME_FIELDS = ("name", "capacity", "owners", "full_party_only", "remote_play_enabled")


@dataclass
class ImportSummary:
    added: List[str] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)


def prepare_game_entries(raw_games: List[Any]) -> List[Dict[str, Any]]:
    """
    Map raw JSON objects onto `CreateGameRequest` fields.
    Keys that are missing or null are left out so the request defaults apply.
    """
    entries: List[Dict[str, Any]] = []
    for raw in tqdm(raw_games, desc="Preparing games"):
        entry = {LEGACY_KEYS.get(key, key): value for key, value in raw.items()} if isinstance(raw, dict) else {}
        entries.append({key: entry[key] for key in GAME_FIELDS if entry.get(key) is not None})
    return entries


def _label(entry: Dict[str, Any], index: int) -> str:
    name = entry.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return f"entry #{index}"


def import_games(service: GameService, raw_games: List[Any]) -> ImportSummary:
    """
    Validate every entry like the API does and add it through the service.
    Entries that are malformed, invalid or clash with an existing game are
    skipped and reported in the summary.
    """
    summary = ImportSummary()
    for index, entry in enumerate(tqdm(prepare_game_entries(raw_games), desc="Importing games")):
        label = _label(entry, index)
        try:
            req_data = CreateGameRequest.model_validate(entry)
            game = service.add_game(**req_data.model_dump())
        except ValidationError as e:
            reason = "; ".join(error["msg"] for error in e.errors(include_url=False))
            logger.warning("Skipping %s: %s", label, reason)
            summary.skipped.append((label, reason))
            continue
        except CatalogError as e:
            if e.status_code >= 500:
                raise
            logger.warning("Skipping %s: %s", label, e)
            summary.skipped.append((label, str(e)))
            continue
        summary.added.append(game.name)
    return summary


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Import games into the catalog from a JSON file.")
    parser.add_argument("path", help="JSON file holding an array of games.")
    parser.add_argument("--backend", choices=SUPPORTED_BACKENDS, default=Config.CATALOG_BACKEND)
    args = parser.parse_args(argv)

    logging.basicConfig(level=Config.LOG_LEVEL)

    with open(args.path, "r", encoding="utf-8") as fh:
        raw_games = json.load(fh)
    if not isinstance(raw_games, list):
        parser.error("The import file must contain a JSON array of games.")

    factory = partial(
        get_document_store, args.backend, Config.CHROMA_PERSISTENCE_DIR, Config.CHROMA_COLLECTION
    )
    with CatalogStore(factory) as catalog:
        summary = import_games(GameService(catalog), raw_games)

    print(f"Imported {len(summary.added)} game(s), skipped {len(summary.skipped)}.")
    for label, reason in summary.skipped:
        print(f"  - {label}: {reason}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
