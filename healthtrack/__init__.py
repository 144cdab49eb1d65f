# healthtrack/__init__.py

from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager

from config import Config

db = SQLAlchemy()
jwt = JWTManager()


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Init extensions
    db.init_app(app)
    jwt.init_app(app)

    # CORS: allow the web/mobile clients to call /api/*
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    # -----------------------------
    # JWT error handlers
    # -----------------------------
    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        return (
            jsonify(
                {
                    "message": "Missing or invalid auth token",
                    "error": reason,
                }
            ),
            401,
        )

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return (
            jsonify(
                {
                    "message": "Invalid auth token",
                    "error": reason,
                }
            ),
            422,
        )

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"message": "Token has expired"}), 401

    # -----------------------------
    # API error handlers
    # -----------------------------
    from .errors import ApiError

    @app.errorhandler(ApiError)
    def api_error_handler(err):
        app.logger.info(f"[api] {err.status_code} {err.message}")
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(404)
    def not_found_handler(_err):
        return jsonify({"message": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed_handler(_err):
        return jsonify({"message": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error_handler(_err):
        return jsonify({"message": "Internal server error"}), 500

    # -----------------------------
    # IMPORT BLUEPRINTS (all routes)
    # -----------------------------
    from .routes.auth_routes import auth_bp
    from .routes.body_record_routes import body_records_bp
    from .routes.meal_routes import meals_bp
    from .routes.exercise_routes import exercises_bp
    from .routes.diary_routes import diary_bp
    from .routes.column_routes import columns_bp

    # -----------------------------
    # REGISTER BLUEPRINTS
    # -----------------------------
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(body_records_bp, url_prefix="/api/body-records")
    app.register_blueprint(meals_bp, url_prefix="/api/meals")
    app.register_blueprint(exercises_bp, url_prefix="/api/exercises")
    app.register_blueprint(diary_bp, url_prefix="/api/diary")
    app.register_blueprint(columns_bp, url_prefix="/api/columns")

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    # -----------------------------
    # DB init
    # -----------------------------
    from . import models  # noqa: F401  (register tables)

    with app.app_context():
        db.create_all()

    return app
