"""
Gravity forward model - Flask application factory.

Serves the REST API for forward gravity computations via registered
FieldService instances.

Usage:
    python app.py              # Development server on http://localhost:5000
    flask run                  # Same, via Flask CLI
"""

__version__ = "0.1.0"

from flask import Flask, jsonify

from gravity.services import ServiceRegistry
from gravity.services.forward import ForwardModelService


def create_registry():
    """Build and populate the service registry."""
    registry = ServiceRegistry()
    registry.register(ForwardModelService())
    return registry


def create_app():
    """Application factory for the forward model Flask app."""
    app = Flask(__name__)

    # Build service registry
    registry = create_registry()

    # Create and register API blueprint (shared + service-owned routes)
    from api.routes import create_api_blueprint
    api = create_api_blueprint(registry)
    app.register_blueprint(api)

    # Root: service index
    @app.route("/")
    def root():
        return jsonify({
            "name": "gravity-model",
            "version": __version__,
            "services": registry.list_all(),
        })

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True, host="127.0.0.1", port=5000)
