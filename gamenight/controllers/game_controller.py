import logging

from flask import Blueprint, current_app, request, jsonify
from pydantic import ValidationError

from gamenight.dtos.game_dtos import (
    CreateGameRequest,
    GameListResponse,
    GamersResponse,
    OwnerRequest,
    UpdateGameRequest,
)
from gamenight.errors import CatalogError
from gamenight.services.game_service import GameService
from gamenight.utils.names import split_names

logger = logging.getLogger(__name__)

games_bp = Blueprint('games', __name__)


def _service() -> GameService:
    return current_app.extensions["game_service"]


def _validation_error(e: ValidationError):
    return jsonify({"error": e.errors(include_url=False, include_context=False)}), 400


def _catalog_error(e: CatalogError):
    return jsonify({"error": str(e)}), e.status_code


def _unexpected_error(e: Exception):
    logger.exception("Unhandled error while serving %s %s", request.method, request.path)
    return jsonify({"error": str(e)}), 500


def _owner_payload() -> OwnerRequest:
    payload = request.get_json(silent=True) or request.args.to_dict()
    return OwnerRequest.model_validate(payload)


@games_bp.route('/health', methods=['GET'])
def health_check():
    """
    Health Check
    ---
    tags:
      - Health
    responses:
      200:
        description: Service is healthy
        schema:
          type: object
          properties:
            status:
              type: string
              example: ok
            message:
              type: string
              example: Game catalog service is healthy
    """
    return jsonify({"status": "ok", "message": "Game catalog service is healthy"})


@games_bp.route('/all', methods=['GET'])
def list_games_route():
    """
    List every game in the catalog, sorted by name.
    ---
    tags:
      - Games
    parameters:
      - in: query
        name: name
        type: string
        required: false
        description: Case-insensitive substring of the game name.
      - in: query
        name: owner
        type: string
        required: false
        description: Case-insensitive substring of an owner's name.
    responses:
      200:
        description: The catalog.
        schema:
          $ref: '#/definitions/GameListResponse'
      503:
        description: The catalog store is unavailable.
    """
    logger.info("Called list games %s", request.args.to_dict())
    try:
        games = _service().list_games(
            name_contains=request.args.get('name'),
            owner_contains=request.args.get('owner'),
        )
        return jsonify(GameListResponse(items=games).model_dump())
    except CatalogError as e:
        return _catalog_error(e)
    except Exception as e:
        return _unexpected_error(e)


@games_bp.route('/all', methods=['POST'])
def add_game_route():
    """
    Add a game to the catalog.
    ---
    tags:
      - Games
    parameters:
      - in: body
        name: body
        required: true
        schema:
          $ref: '#/definitions/CreateGameRequest'
        examples:
          default:
            value:
              name: "Overcooked 2"
              capacity: 4
              owners: ["Alice", "Bob"]
              full_party_only: false
              remote_play_enabled: true
    responses:
      201:
        description: The created game.
        schema:
          $ref: '#/definitions/GameDTO'
      400:
        description: Missing or invalid fields.
      409:
        description: A game with the same name already exists.
    """
    logger.info("Called add game")
    try:
        req_data = CreateGameRequest.model_validate_json(request.data)
        game = _service().add_game(
            name=req_data.name,
            capacity=req_data.capacity,
            owners=req_data.owners,
            full_party_only=req_data.full_party_only,
            remote_play_enabled=req_data.remote_play_enabled,
        )
        return jsonify(game.model_dump()), 201
    except ValidationError as e:
        return _validation_error(e)
    except CatalogError as e:
        return _catalog_error(e)
    except Exception as e:
        return _unexpected_error(e)


@games_bp.route('/game/<game_id>', methods=['GET'])
def get_game_route(game_id):
    """
    Get a single game.
    ---
    tags:
      - Games
    parameters:
      - in: path
        name: game_id
        type: string
        required: true
    responses:
      200:
        description: The game.
        schema:
          $ref: '#/definitions/GameDTO'
      404:
        description: Game not found.
    """
    try:
        return jsonify(_service().get_game(game_id).model_dump())
    except CatalogError as e:
        return _catalog_error(e)
    except Exception as e:
        return _unexpected_error(e)


@games_bp.route('/game/<game_id>', methods=['PATCH'])
def update_game_route(game_id):
    """
    Edit a game's fields. Only the fields sent are changed.
    ---
    tags:
      - Games
    parameters:
      - in: path
        name: game_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          $ref: '#/definitions/UpdateGameRequest'
    responses:
      200:
        description: The updated game.
        schema:
          $ref: '#/definitions/GameDTO'
      400:
        description: No updates provided or invalid fields.
      404:
        description: Game not found.
      409:
        description: Another game already uses the new name.
    """
    logger.info("Called update game %s", game_id)
    try:
        req_data = UpdateGameRequest.model_validate_json(request.data)
        game = _service().update_game(game_id, req_data.changes())
        return jsonify(game.model_dump())
    except ValidationError as e:
        return _validation_error(e)
    except CatalogError as e:
        return _catalog_error(e)
    except Exception as e:
        return _unexpected_error(e)


@games_bp.route('/game/<game_id>', methods=['DELETE'])
def delete_game_route(game_id):
    """
    Delete a game.
    ---
    tags:
      - Games
    parameters:
      - in: path
        name: game_id
        type: string
        required: true
    responses:
      200:
        description: Game deleted.
      404:
        description: Game not found.
    """
    logger.info("Called delete game %s", game_id)
    try:
        _service().delete_game(game_id)
        return jsonify({"message": "Game deleted"})
    except CatalogError as e:
        return _catalog_error(e)
    except Exception as e:
        return _unexpected_error(e)


@games_bp.route('/game/<game_id>/gamers', methods=['POST'])
def add_gamer_route(game_id):
    """
    Add an owner to a game.
    ---
    tags:
      - Owners
    parameters:
      - in: path
        name: game_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          $ref: '#/definitions/OwnerRequest'
    responses:
      200:
        description: The updated game.
        schema:
          $ref: '#/definitions/GameDTO'
      404:
        description: Game not found.
      409:
        description: The player already owns this game.
    """
    logger.info("Called add gamer %s", game_id)
    try:
        req_data = _owner_payload()
        game = _service().add_owner(game_id, req_data.gamer_name)
        return jsonify(game.model_dump())
    except ValidationError as e:
        return _validation_error(e)
    except CatalogError as e:
        return _catalog_error(e)
    except Exception as e:
        return _unexpected_error(e)


@games_bp.route('/game/<game_id>/gamers', methods=['DELETE'])
def remove_gamer_route(game_id):
    """
    Remove an owner from a game. Removing a non-owner is a no-op.
    ---
    tags:
      - Owners
    parameters:
      - in: path
        name: game_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          $ref: '#/definitions/OwnerRequest'
    responses:
      200:
        description: The updated game.
        schema:
          $ref: '#/definitions/GameDTO'
      404:
        description: Game not found.
    """
    logger.info("Called remove gamer %s", game_id)
    try:
        req_data = _owner_payload()
        game = _service().remove_owner(game_id, req_data.gamer_name)
        return jsonify(game.model_dump())
    except ValidationError as e:
        return _validation_error(e)
    except CatalogError as e:
        return _catalog_error(e)
    except Exception as e:
        return _unexpected_error(e)


@games_bp.route('/playable', methods=['GET'])
def playable_games_route():
    """
    Games a group of players can play together.
    ---
    tags:
      - Playable
    parameters:
      - in: query
        name: players
        type: string
        required: true
        description: Comma-separated player names.
        example: "Alice, Bob"
    responses:
      200:
        description: Playable games sorted by name, each with the requested players who own it.
        schema:
          $ref: '#/definitions/PlayableGamesResponse'
      400:
        description: No players given.
    """
    player_list = split_names(request.args.get('players', ''))
    logger.info("Called playable %s", player_list)
    try:
        response = _service().playable_games(player_list)
        return jsonify(response.model_dump())
    except CatalogError as e:
        return _catalog_error(e)
    except Exception as e:
        return _unexpected_error(e)


@games_bp.route('/gamers', methods=['GET'])
def list_gamers_route():
    """
    Every player who owns at least one game.
    ---
    tags:
      - Owners
    responses:
      200:
        description: Distinct player names, sorted.
        schema:
          $ref: '#/definitions/GamersResponse'
    """
    try:
        return jsonify(GamersResponse(gamers=_service().list_players()).model_dump())
    except CatalogError as e:
        return _catalog_error(e)
    except Exception as e:
        return _unexpected_error(e)


@games_bp.route('/gamers/<gamer_name>', methods=['GET'])
def games_by_gamer_route(gamer_name):
    """
    Games owned by one player.
    ---
    tags:
      - Owners
    parameters:
      - in: path
        name: gamer_name
        type: string
        required: true
    responses:
      200:
        description: The player's games, sorted by name.
        schema:
          $ref: '#/definitions/GameListResponse'
    """
    try:
        games = _service().games_for_player(gamer_name)
        return jsonify(GameListResponse(items=games).model_dump())
    except CatalogError as e:
        return _catalog_error(e)
    except Exception as e:
        return _unexpected_error(e)
