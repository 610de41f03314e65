import logging
from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

# Import database instance
from database import db
from utils import ConfigHelper

load_dotenv()


def create_app(config=None):
    """Build the back office application. `config` overrides environment settings."""
    app_config = ConfigHelper.get_app_config()
    database_config = ConfigHelper.get_database_config()

    logging.basicConfig(
        level=getattr(logging, app_config['log_level'], logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    app = Flask(__name__)
    # CORS is limited to the `/api/*` namespace so external tools can call
    # the maintenance endpoints.
    CORS(app, resources={r"/api/*": {"origins": app_config['allowed_origins']}})
    app.secret_key = app_config['secret_key']
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)

    # Configure the database
    app.config["SQLALCHEMY_DATABASE_URI"] = database_config['url']
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
        "pool_recycle": database_config['pool_recycle'],
        "pool_pre_ping": True,
    }
    app.config["DEDUPE"] = ConfigHelper.get_dedupe_config()

    if config:
        app.config.update(config)

    db.init_app(app)

    # Import routes and register them with the app
    from routes import register_routes
    register_routes(app)

    from commands import register_commands
    register_commands(app)

    with app.app_context():
        # Import models to create tables
        import models  # noqa: F401

        db.create_all()

    return app
