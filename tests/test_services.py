"""
Tests for the service layer: registry and forward-model request parsing.

These call ForwardModelService directly, without the Flask client.
"""

import numpy as np
import pytest

from gravity.components import FieldComponent
from gravity.cuboid import Cuboid
from gravity.services import FieldService, ServiceRegistry
from gravity.services.forward import ForwardModelService
from gravity.sphere import Sphere


class TestServiceRegistry:

    def test_register_and_get(self):
        registry = ServiceRegistry()
        service = ForwardModelService()
        registry.register(service)
        assert registry.get("forward") is service
        assert registry.get("missing") is None
        assert list(registry) == [service]

    def test_duplicate_id(self):
        registry = ServiceRegistry()
        registry.register(ForwardModelService())
        with pytest.raises(ValueError):
            registry.register(ForwardModelService())

    def test_routes_are_required(self):
        class Incomplete(FieldService):
            id = "incomplete"

            def validate(self, config):
                return config

            def compute(self, config):
                return {}

        with pytest.raises(TypeError):
            Incomplete()


class TestForwardValidate:

    @pytest.fixture
    def service(self):
        return ForwardModelService()

    def test_bodies_and_points(self, service):
        config = service.validate({
            "bodies": [{"type": "sphere"}, {"Cuboid": {"x_length": 2.0}}],
            "points": [[0, 0, 0], [1, 0, 0]],
            "components": ["gz", "gxx"],
        })
        engine = config["engine"]
        assert engine.bodies == [Sphere(), Cuboid(x_length=2.0)]
        assert engine.points.shape == (2, 3)
        assert engine.components == [FieldComponent.GZ, FieldComponent.GXX]
        assert config["verbose"] is False
        assert config["layout"] == {}

    def test_single_component_string(self, service):
        config = service.validate({
            "bodies": [{"type": "sphere"}], "points": [0, 0, 0], "components": "Gzz",
        })
        assert config["engine"].components == [FieldComponent.GZZ]

    def test_preset_profile(self, service):
        config = service.validate({"preset": "concrete_block"})
        assert len(config["engine"].points) == 121
        assert len(config["layout"]["profile_distance"]) == 121

    def test_body_error_names_index(self, service):
        with pytest.raises(ValueError, match="Body 1"):
            service.validate({
                "bodies": [{"type": "sphere"}, {"type": "sphere", "radius": 0}],
                "points": [0, 0, 0],
            })

    def test_compute_layout_merged(self, service):
        config = service.validate({
            "bodies": [{"type": "sphere"}],
            "grid": {"x_range": [-1, 1], "y_range": [-1, 1], "num_x": 2, "num_y": 2, "z": 1.0},
        })
        result = service.compute(config)
        assert result["grid_shape"] == [2, 2]
        assert np.isfinite(result["values"]["Gz"]).all()

    def test_summarize(self, service):
        summary = service.summarize([Cuboid(x_length=2.0), Sphere()])
        assert summary["total_volume"] == pytest.approx(2.0 + 4.0 / 3.0 * np.pi)
        assert [b["type"] for b in summary["bodies"]] == ["cuboid", "sphere"]
