"""
API Flask pour GuideLight
"""

from flask import Flask
from flask_cors import CORS

from .config import CONFIG
from .routes import navigation_bp


def create_app(config: dict = None) -> Flask:
    app = Flask(__name__)
    CORS(app)  # Permettre requêtes depuis l'app mobile et l'éditeur web
    if config:
        app.config.update(config)

    # Enregistrer les blueprints
    app.register_blueprint(navigation_bp)
    return app


def run(host: str = None, port: int = None, debug: bool = False):
    CONFIG.setup_logging()
    app = create_app()
    app.run(
        host=host or CONFIG.API_SETTINGS['host'],
        port=port or CONFIG.API_SETTINGS['port'],
        debug=debug
    )
