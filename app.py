from flask import Flask
import os
from gamenight import create_app

if __name__ == "__main__":
    app: Flask = create_app()
    port = int(os.getenv("FLASK_RUN_PORT", 5000))
    debug_mode = os.getenv("FLASK_DEBUG", "True").lower() == "true"

    app.run(
        host='0.0.0.0',
        port=port,
        debug=debug_mode
    )
