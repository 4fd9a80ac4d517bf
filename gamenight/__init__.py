import atexit
import logging
from functools import partial
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS
from flasgger import Flasgger
from gamenight.dtos.game_dtos import (
    GameDTO,
    PlayableGameDTO,
    CreateGameRequest,
    UpdateGameRequest,
    OwnerRequest,
    GameListResponse,
    PlayableGamesResponse,
    GamersResponse,
)
from gamenight.repositories import CatalogStore
from gamenight.services.game_service import GameService
from gamenight.utils.chroma_setup import get_document_store

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure_logging(level: str) -> None:
  logging.basicConfig(level=level, format=LOG_FORMAT)
  logging.getLogger("gamenight").setLevel(level)


def build_catalog_store(config) -> CatalogStore:
  """Catalog store for the backend named in the app config."""
  factory = partial(
      get_document_store,
      config["CATALOG_BACKEND"],
      config["CHROMA_PERSISTENCE_DIR"],
      config["CHROMA_COLLECTION"],
  )
  return CatalogStore(factory)


def create_app(config_object='gamenight.config.config.Config', catalog: Optional[CatalogStore] = None):
  app = Flask(__name__)
  
  CORS(app)

  app.config.from_object(config_object)
  _configure_logging(app.config.get("LOG_LEVEL", "INFO"))

  # Generate OpenAPI schemas from Pydantic models with Swagger-friendly refs
  def _schema(model):
      return model.model_json_schema(ref_template="#/definitions/{model}")

  pydantic_schemas = {
      "GameDTO": _schema(GameDTO),
      "PlayableGameDTO": _schema(PlayableGameDTO),
      "CreateGameRequest": _schema(CreateGameRequest),
      "UpdateGameRequest": _schema(UpdateGameRequest),
      "OwnerRequest": _schema(OwnerRequest),
      "GameListResponse": _schema(GameListResponse),
      "PlayableGamesResponse": _schema(PlayableGamesResponse),
      "GamersResponse": _schema(GamersResponse),
  }

  # Flasgger configuration
  swagger_template = {
      "swagger": "2.0",
      "info": {
          "title": "Game Night Catalog API",
          "description": "API for registering owned games and finding what a group can play together.",
          "version": "1.0.0"
      },
      "basePath": "/api",
      "schemes": [
          "http"
      ],
      "definitions": pydantic_schemas
  }

  Flasgger(app, template=swagger_template)

  if catalog is None:
    catalog = build_catalog_store(app.config)
    atexit.register(catalog.close)
  catalog.open()
  app.extensions["catalog_store"] = catalog
  app.extensions["game_service"] = GameService(catalog)
  
  @app.route('/')
  def index():
    return jsonify({"message": "Welcome to the Game Night Catalog API!"})
  
  from gamenight.routes import api_bp as routes
  
  app.register_blueprint(routes, url_prefix='/api')

  return app
