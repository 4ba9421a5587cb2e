import logging
import secrets

from flask import Flask
from config import Config
from errors import register_error_handlers
from routes.resources import subscriptions_bp, transactions_bp, savings_bp, goals_bp
from routes.dashboard import dashboard_bp
from routes.settings import settings_bp

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.json.sort_keys = False

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = secrets.token_hex(32)

    config_class.init_db(app)

    app.register_blueprint(subscriptions_bp)
    app.register_blueprint(transactions_bp)
    app.register_blueprint(savings_bp)
    app.register_blueprint(goals_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(settings_bp)

    register_error_handlers(app)

    return app

app = create_app()
