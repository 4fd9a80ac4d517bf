import os
from dotenv import load_dotenv

load_dotenv()

class Config:
  """
    Configuration class for the application.
    This class loads environment variables from a .env file and provides access to them.
  """
  
  FLASK_APP = os.getenv("FLASK_APP", "app.py")
  FLASK_RUN_PORT = int(os.getenv("FLASK_RUN_PORT", 5000))
  FLASK_DEBUG = os.getenv("FLASK_DEBUG", "True").lower() == "true"
  LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
  CATALOG_BACKEND = os.getenv("CATALOG_BACKEND", "chroma").lower()
  CHROMA_PERSISTENCE_DIR = os.getenv("CHROMA_PERSISTENCE_DIR", "./data/chroma_game_catalog")
  CHROMA_COLLECTION = os.getenv("CHROMA_COLLECTION", "game_catalog")


class TestingConfig(Config):
  """Runs against an in-memory catalog so tests never touch disk."""

  TESTING = True
  FLASK_DEBUG = False
  CATALOG_BACKEND = "memory"
