import logging

from flask import Flask, jsonify
from config import Config
from server.smartpark.errors import register_error_handlers
from server.smartpark.extensions import db, cors
from server.smartpark.utils import hash_password

logger = logging.getLogger(__name__)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Initialize extensions
    db.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})
    register_error_handlers(app)

    # Register blueprints
    from server.smartpark.blueprints.auth import auth_bp
    from server.smartpark.blueprints.api import api_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(api_bp)

    @app.route("/")
    def index():
        return jsonify({"message": "Welcome to SmartPark API"})

    # Import models BEFORE create_all()
    with app.app_context():
        from server.smartpark.models import User

        db.create_all()

        # Create default admin if not exists
        username = app.config["ADMIN_USERNAME"]
        if not User.query.filter_by(username=username).first():
            admin_user = User(
                username=username,
                password=hash_password(app.config["ADMIN_PASSWORD"]),
                role="admin"
            )
            db.session.add(admin_user)
            db.session.commit()
            logger.info(f"Admin user created: {username}")

    return app


def main():
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    application = create_app()
    application.run(host='0.0.0.0', port=5000, debug=False)


if __name__ == "__main__":
    main()
