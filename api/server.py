from flask import Flask
from flask_cors import CORS
import logging

from core.config import get_settings
from routes.scripture_api import scripture_bp


def create_app(settings=None):
    settings = settings or get_settings()

    app = Flask(__name__)
    app.config["SCRIPTURE_DB"] = settings.db_path

    # A list containing "*" makes flask-cors echo the request origin
    origins = "*" if "*" in settings.cors_origins else list(settings.cors_origins)
    CORS(app, origins=origins)

    # Register blueprints
    app.register_blueprint(scripture_bp)

    return app


settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = create_app(settings)

if __name__ == "__main__":
    app.run(host=settings.host, port=settings.port)
