from flask import Blueprint
from gamenight.controllers.game_controller import games_bp

api_bp = Blueprint('api', __name__)

api_bp.register_blueprint(games_bp, url_prefix='/games')
