"""
Flask API routes shared by all services.

Endpoints:
  GET  /api/services             - registered services and their status
  GET  /api/services/<id>        - one service's metadata
  GET  /api/constants            - physical constants and display scales

Service-owned endpoints (e.g. /api/forward/*) are mounted by each
service's register_routes().
"""

from flask import Blueprint, jsonify

from gravity import constants
from gravity.components import FieldComponent


def create_api_blueprint(registry):
    """
    Build the /api blueprint with shared routes plus every registered
    service's own routes.

    Parameters
    ----------
    registry : ServiceRegistry

    Returns
    -------
    flask.Blueprint
    """
    api = Blueprint("api", __name__, url_prefix="/api")

    @api.route("/services", methods=["GET"])
    def list_services():
        """Return metadata for every registered service."""
        return jsonify(registry.list_all())

    @api.route("/services/<service_id>", methods=["GET"])
    def get_service(service_id):
        """Return metadata for one registered service."""
        service = registry.get(service_id)
        if service is None:
            return jsonify({"error": "Service not found"}), 404
        return jsonify(service.metadata())

    @api.route("/constants", methods=["GET"])
    def get_constants():
        """Return the constants the forward model is computed with."""
        return jsonify({
            "G": constants.G,
            "observation_perturbation": constants.OBSERVATION_PERTURBATION,
            "vector_scale": constants.VECTOR_SCALE,
            "tensor_scale": constants.TENSOR_SCALE,
            "units": {c.label: c.unit for c in FieldComponent},
            "limits": {
                "max_bodies": constants.MAX_BODIES,
                "max_points": constants.MAX_POINTS,
                "max_objects": constants.MAX_OBJECTS,
            },
        })

    for service in registry:
        service.register_routes(api)

    return api
