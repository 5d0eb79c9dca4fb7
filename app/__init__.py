from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
import logging
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()


def configure_logging(level: str):
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def create_app(config_name='development'):
    from app.config import get_config

    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    configure_logging(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    CORS(app)

    # Create tables with error handling
    with app.app_context():
        from app import models  # noqa: F401 - register tables on the metadata
        try:
            db.create_all()
        except Exception as e:
            app.logger.warning(f"Could not create database tables: {e}")

    # Register routes
    from app.routes import register_routes
    register_routes(app)

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app
