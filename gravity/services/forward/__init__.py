"""
Forward Model Service.

Implements the FieldService interface for forward gravity modelling:
given a set of bodies and observation points, return the scaled field
components. Owns all endpoints under /api/forward/*.

Endpoints:
    POST /api/forward/evaluate         - field components at points/profile/grid
    POST /api/forward/summary          - volume, mass, centre per body
    POST /api/forward/outline          - 2-D outlines of bodies in a plane
    GET  /api/forward/components       - the nine field components
    GET  /api/forward/densities        - density presets (kg/m^3)
    GET  /api/forward/presets          - list example models
    GET  /api/forward/presets/<id>     - one example model

Bodies can be given three ways (exactly one per request):
    "bodies": [{"type": "cuboid", ...}, {"type": "sphere", ...}]
    "model":  a persisted model document (optionally with "group")
    "preset": id of an example model from data.models

Observation points can be given three ways (at most one per request):
    "points":  [[x, y, z], ...]
    "profile": {"start": [x, y, z], "end": [x, y, z], "num_points": n}
    "grid":    {"x_range": [a, b], "y_range": [c, d], "num_x": n, "num_y": m, "z": h}
A preset without explicit points uses its suggested profile.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging

from flask import jsonify, request

from gravity.services import FieldService
from gravity import constants
from gravity.components import FieldComponent
from gravity.engine import EngineConfig, FieldEngine
from gravity.geometry import Plane, outline
from gravity.model import Model, body_from_dict
from gravity.survey import grid, grid_shape, profile, profile_distance
from data.models import get_all_models, get_model_by_id

log = logging.getLogger(__name__)

BODY_SOURCES = ("bodies", "model", "preset")
POINT_SOURCES = ("points", "profile", "grid")


class ForwardModelService(FieldService):
    """
    Forward gravity modelling over cuboids and spheres.

    Each request is evaluated from scratch: bodies are rebuilt from the
    request parameters, so concurrent requests never share state.
    """

    id = "forward"
    name = "Forward Model"
    description = "Gravity vector and gradient tensor of buried cuboids and spheres"
    status = "live"
    route = "/api/forward"

    # ------------------------------------------------------------------
    # Request parsing
    # ------------------------------------------------------------------

    def parse_bodies(self, config):
        """
        Resolve the body list of a request.

        Returns
        -------
        (list of GravityBody, dict or None)
            The bodies and, for presets, the catalogue entry.

        Raises
        ------
        ValueError
            If zero or several body sources are given, or any body is
            invalid.
        """
        given = [key for key in BODY_SOURCES if config.get(key) is not None]
        if len(given) != 1:
            raise ValueError("Exactly one of 'bodies', 'model' or 'preset' is required")
        source = given[0]

        if source == "bodies":
            raw = config["bodies"]
            if not isinstance(raw, list):
                raise ValueError("'bodies' must be a list")
            bodies = []
            for i, item in enumerate(raw):
                try:
                    bodies.append(body_from_dict(item))
                except ValueError as err:
                    raise ValueError("Body {}: {}".format(i, err)) from None
            return bodies, None

        if source == "model":
            model = Model.from_dict(config["model"])
            return self._model_bodies(model, config.get("group")), None

        entry = get_model_by_id(str(config["preset"]))
        if entry is None:
            raise ValueError("Unknown preset '{}'".format(config["preset"]))
        model = Model.from_dict(entry["model"])
        return self._model_bodies(model, config.get("group")), entry

    def _model_bodies(self, model, group):
        if group is None:
            return model.bodies()
        if not isinstance(group, str):
            raise ValueError("'group' must be a group name")
        if group not in model.groups:
            raise ValueError("Model has no group '{}'".format(group))
        return model.group_bodies(group)

    def parse_points(self, config, preset=None):
        """
        Resolve the observation points of a request.

        Returns
        -------
        (ndarray, dict)
            (N, 3) points and layout info for the response
            ({"profile_distance": [...]} or {"grid_shape": [ny, nx]}).
        """
        given = [key for key in POINT_SOURCES if config.get(key) is not None]
        if len(given) > 1:
            raise ValueError("Give only one of 'points', 'profile' or 'grid'")
        if not given:
            if preset is None:
                raise ValueError("Observation 'points', 'profile' or 'grid' is required")
            params = preset["profile"]
            points = profile(params["start"], params["end"], params["num_points"])
            return points, {"profile_distance": profile_distance(points).tolist()}

        source = given[0]
        params = config[source]
        if source == "points":
            return params, {}

        if not isinstance(params, dict):
            raise ValueError("'{}' must be a JSON object".format(source))
        try:
            if source == "profile":
                num_points = int(params.get("num_points", 101))
                self._check_count(num_points)
                points = profile(params["start"], params["end"], num_points)
                return points, {"profile_distance": profile_distance(points).tolist()}
            num_x = int(params.get("num_x", 21))
            num_y = int(params.get("num_y", 21))
            self._check_count(num_x * num_y)
            points = grid(params["x_range"], params["y_range"], num_x, num_y, params.get("z", 0.0))
            return points, {"grid_shape": list(grid_shape(num_x, num_y))}
        except KeyError as err:
            raise ValueError("'{}' is missing {}".format(source, err)) from None
        except (IndexError, TypeError):
            raise ValueError("'{}' has malformed values".format(source)) from None

    @staticmethod
    def _check_count(n):
        if n > constants.MAX_POINTS:
            raise ValueError(
                "At most {} observation points per evaluation, got {}".format(constants.MAX_POINTS, n)
            )

    def parse_components(self, config):
        components = config.get("components")
        if components is None:
            components = [config.get("component", "gz")]
        elif isinstance(components, str):
            components = [components]
        if not isinstance(components, list):
            raise ValueError("'components' must be a list of component names")
        return components

    # ------------------------------------------------------------------
    # FieldService interface
    # ------------------------------------------------------------------

    def validate(self, config):
        """Validate an evaluation request; returns the normalized config."""
        if not config or not isinstance(config, dict):
            raise ValueError("Request body must be JSON")
        bodies, preset = self.parse_bodies(config)
        points, layout = self.parse_points(config, preset)
        engine_config = EngineConfig(bodies, points, self.parse_components(config))
        return {
            "engine": engine_config,
            "layout": layout,
            "verbose": bool(config.get("verbose", False)),
        }

    def compute(self, config):
        """Run the engine and serialize the result."""
        result = FieldEngine(config["engine"]).run()
        if config["verbose"]:
            response = result.to_verbose_response()
        else:
            response = result.to_api_response()
        response.update(config["layout"])
        return response

    def summarize(self, bodies):
        """Volume, mass and centre of each body plus totals."""
        items = [b.describe() for b in bodies]
        return {
            "bodies": items,
            "total_volume": sum(item["volume"] for item in items),
            "total_mass": sum(item["mass"] for item in items),
        }

    def outlines(self, bodies, plane, num_points=64):
        plane = Plane.parse(plane)
        return {
            "plane": plane.name,
            "outlines": [
                dict(type=b.type_name, **outline(b, plane, num_points)) for b in bodies
            ],
        }

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    def register_routes(self, bp):
        """Mount forward-model endpoints."""

        @bp.route("/forward/evaluate", methods=["POST"])
        def forward_evaluate():
            data = request.get_json(silent=True)
            try:
                config = self.validate(data)
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            response = self.compute(config)
            log.info(
                "Evaluated %s for %d bodies at %d points",
                ",".join(c.label for c in config["engine"].components),
                len(config["engine"].bodies), len(config["engine"].points),
            )
            return jsonify(response)

        @bp.route("/forward/summary", methods=["POST"])
        def forward_summary():
            data = request.get_json(silent=True)
            if not data or not isinstance(data, dict):
                return jsonify({"error": "Request body must be JSON"}), 400
            try:
                bodies, _ = self.parse_bodies(data)
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(self.summarize(bodies))

        @bp.route("/forward/outline", methods=["POST"])
        def forward_outline():
            data = request.get_json(silent=True)
            if not data or not isinstance(data, dict):
                return jsonify({"error": "Request body must be JSON"}), 400
            try:
                bodies, _ = self.parse_bodies(data)
                result = self.outlines(
                    bodies, data.get("plane", "xz"), int(data.get("num_points", 64))
                )
            except (TypeError, ValueError) as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(result)

        @bp.route("/forward/components", methods=["GET"])
        def forward_components():
            return jsonify([
                {
                    "id": c.value,
                    "label": c.label,
                    "kind": "vector" if c.is_vector else "tensor",
                    "unit": c.unit,
                    "scale": c.scale,
                }
                for c in FieldComponent
            ])

        @bp.route("/forward/densities", methods=["GET"])
        def forward_densities():
            return jsonify({
                "presets": constants.DENSITY_PRESETS,
                "range": list(constants.DENSITY_RANGE),
            })

        @bp.route("/forward/presets", methods=["GET"])
        def forward_presets():
            return jsonify(get_all_models())

        @bp.route("/forward/presets/<model_id>", methods=["GET"])
        def forward_preset(model_id):
            entry = get_model_by_id(model_id)
            if entry is None:
                return jsonify({"error": "Preset not found"}), 404
            return jsonify(entry)
