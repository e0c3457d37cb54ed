import logging

from flask import Flask, jsonify
from flask_cors import CORS

from shiftboard.config.config import Config
from shiftboard.config.env import init_env
from shiftboard.extensions import db, jwt, yelp
from shiftboard.controllers.auth_controller import auth_bp
from shiftboard.controllers.store_controller import store_bp
from shiftboard.controllers.report_controller import report_bp
from shiftboard.controllers.analytics_controller import analytics_bp
from shiftboard.controllers.manager_controller import manager_bp
from shiftboard.controllers.managers_controller import managers_bp
from shiftboard.controllers.review_controller import review_bp
from shiftboard.controllers.export_controller import export_bp

def create_app(config_class=Config):
    if config_class is Config:
        # Initialize environment variables
        init_env()
    app = Flask(__name__)
    app.config.from_object(config_class)

    if not app.debug and not app.testing:
        logging.basicConfig(level=logging.INFO)

    # Initialize extensions AFTER app creation
    db.init_app(app)
    jwt.init_app(app)
    yelp.init_app(app)

    CORS(app, resources={
        r"/*": {
            "origins": "*",
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
            "expose_headers": ["Content-Disposition", "Content-Type"],
        }
    })

    # Register Blueprints (Routes)
    app.register_blueprint(auth_bp)
    app.register_blueprint(store_bp)
    app.register_blueprint(report_bp)
    app.register_blueprint(analytics_bp)
    app.register_blueprint(manager_bp)
    app.register_blueprint(managers_bp)
    app.register_blueprint(review_bp)
    app.register_blueprint(export_bp)

    @app.route('/')
    def welcome():
        return jsonify({'message': 'Welcome to the Shiftboard API'})

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    return app
