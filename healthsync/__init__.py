import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS

from healthsync.config import config
from healthsync.extensions import db, ma, jwt, migrate, limiter


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))

    app.logger.handlers = [handler]
    app.logger.setLevel(level)

    package_logger = logging.getLogger("healthsync")
    if not package_logger.handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(level)


def create_app(config_name=None):
    app = Flask(__name__)
    config_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config[config_name])

    configure_logging(app)

    # extensions
    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    CORS(app, resources={r"/api/*": {
        "origins": app.config["CORS_ORIGINS"],
        "allow_headers": ["Content-Type", "Authorization"],
        "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    }}, supports_credentials=True)

    from healthsync.clients import init_clients
    init_clients(app)

    from healthsync.errors import register_error_handlers
    register_error_handlers(app)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"msg": "Token has expired", "status_code": 401}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({"msg": f"Invalid token: {error}", "status_code": 401}), 401

    @jwt.unauthorized_loader
    def unauthorized_callback(error):
        return jsonify({"msg": error, "status_code": 401}), 401

    # Blueprints
    from healthsync.routes.auth import auth_bp
    from healthsync.routes.goals import goals_bp
    from healthsync.routes.workout import workout_bp
    from healthsync.routes.nutrition import nutrition_bp
    from healthsync.routes.exercises import exercises_bp
    from healthsync.routes.food_items import food_items_bp
    from healthsync.routes.user_profile import profile_bp
    from healthsync.routes.dashboard import dashboard_bp
    from healthsync.routes.chat import chat_bp
    from healthsync.routes.admin import admin_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(goals_bp, url_prefix="/api/goals")
    app.register_blueprint(workout_bp, url_prefix="/api/workout")
    app.register_blueprint(nutrition_bp, url_prefix="/api/nutrition")
    app.register_blueprint(exercises_bp, url_prefix="/api/exercises")
    app.register_blueprint(food_items_bp, url_prefix="/api/fooditems")
    app.register_blueprint(profile_bp, url_prefix="/api/userprofile")
    app.register_blueprint(dashboard_bp, url_prefix="/api/dashboard")
    app.register_blueprint(chat_bp, url_prefix="/api/chat")
    app.register_blueprint(admin_bp, url_prefix="/api/admin")

    from healthsync.seed import seed_command
    app.cli.add_command(seed_command)

    return app
