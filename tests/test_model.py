"""
Tests for the persisted model document (gravity.model) and the
example catalogue (data.models).
"""

import json

import pytest

from gravity.constants import MAX_OBJECTS
from gravity.cuboid import Cuboid
from gravity.model import Model, ModelObject, body_from_dict, body_to_tagged
from gravity.sphere import Sphere
from data.models import EXAMPLE_MODELS, get_all_models, get_model_by_id


class TestBodyFromDict:

    def test_internal_form(self):
        body = body_from_dict({"type": "Sphere", "radius": 2.0, "density": 100})
        assert isinstance(body, Sphere)
        assert body.radius == 2.0
        assert body.z_centroid == -1.0

    def test_tagged_form(self):
        body = body_from_dict({"Cuboid": {"x_length": 3.0, "z_rotation": 0.5}})
        assert isinstance(body, Cuboid)
        assert body.x_length == 3.0
        assert body.z_rotation == 0.5

    def test_unknown_keys_ignored(self):
        body = body_from_dict({"type": "cuboid", "colour": [1, 2, 3, 4]})
        assert body == Cuboid()

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            body_from_dict({"type": "cylinder"})

    def test_missing_type(self):
        with pytest.raises(ValueError):
            body_from_dict({"x_length": 1.0, "y_length": 1.0})

    def test_degenerate(self):
        with pytest.raises(ValueError):
            body_from_dict({"Sphere": {"radius": 0.0}})

    def test_tagged_round_trip(self):
        block = Cuboid(x_length=2.0, x_rotation=0.1, density=19300.0)
        assert body_from_dict(body_to_tagged(block)) == block


class TestModel:

    def test_add_and_bodies(self):
        model = Model("site")
        assert model.add_body(Cuboid(), name="a")
        assert model.add_body(Sphere(), name="b")
        assert len(model) == 2
        assert [type(b) for b in model.bodies()] == [Cuboid, Sphere]
        assert list(model.objects) == ["0", "1"]

    def test_object_limit(self):
        model = Model()
        for _ in range(MAX_OBJECTS):
            assert model.add_body(Sphere())
        assert model.add_body(Sphere()) is False
        assert len(model) == MAX_OBJECTS

    def test_ids_not_reused(self):
        model = Model()
        model.add_body(Sphere())
        model.add_body(Sphere())
        model.remove_object(0)
        model.add_body(Cuboid())
        assert list(model.objects) == ["1", "2"]

    def test_groups(self):
        model = Model()
        model.add_body(Cuboid(), name="a")
        model.add_body(Sphere(), name="b")
        model.set_group("balls", [1])
        assert model.group_bodies("balls") == [Sphere()]
        model.remove_object(1)
        assert model.group_bodies("balls") == []

    def test_group_unknown_id(self):
        model = Model()
        with pytest.raises(KeyError):
            model.set_group("g", [5])


class TestSerialization:

    @pytest.fixture
    def model(self):
        model = Model("survey_a")
        model.add_body(Cuboid(x_length=2.0, density=2000.0), name="block",
                       colour=[10, 20, 30, 255])
        model.add_body(Sphere(radius=0.5), name="void")
        model.set_group("voids", [1])
        return model

    def test_placeholders_written(self, model):
        data = model.to_dict()
        assert data["objects"]["None"] is None
        assert data["groups"]["None"] is None
        assert data["objects"]["0"]["object"]["Cuboid"]["x_length"] == 2.0
        assert data["groups"]["voids"] == ["1"]
        assert data["object_counter"] == 2

    def test_json_round_trip(self, model):
        loaded = Model.from_json(model.to_json())
        assert loaded.name == "survey_a"
        assert loaded.bodies() == model.bodies()
        assert loaded.groups == model.groups
        assert loaded.objects["0"].colour == [10, 20, 30, 255]
        assert loaded.objects["1"].name == "void"
        assert loaded.object_counter == 2

    def test_save_and_load(self, model, tmp_path):
        path = model.save_json(str(tmp_path))
        assert path.endswith("survey_a.json")
        with open(path, encoding="utf-8") as f:
            assert json.load(f)["name"] == "survey_a"
        assert Model.load_json(path).bodies() == model.bodies()
        assert [p.name for p in tmp_path.iterdir()] == ["survey_a.json"]

    def test_invalid_json(self):
        with pytest.raises(ValueError):
            Model.from_json("{not json")

    def test_too_many_objects(self):
        objects = {
            str(i): ModelObject(Sphere(), id=i).to_dict() for i in range(MAX_OBJECTS + 1)
        }
        with pytest.raises(ValueError):
            Model.from_dict({"name": "big", "objects": objects})

    def test_counter_recomputed(self):
        data = {
            "name": "m",
            "objects": {"7": ModelObject(Sphere(), id=7).to_dict()},
            "object_counter": 0,
        }
        assert Model.from_dict(data).object_counter == 8

    @pytest.mark.parametrize("data", [
        {"objects": {"0": {"object": {"type": "sphere"}, "id": None}}},
        {"objects": {"0": {"object": {"type": "sphere"}, "colour": 5}}},
        {"objects": {"0": {"object": {"type": "sphere"}}}, "groups": {"a": 5}},
        {"objects": {}, "object_counter": None},
        {"objects": {}, "object_counter": "many"},
    ])
    def test_malformed_fields(self, data):
        with pytest.raises(ValueError):
            Model.from_dict(data)


class TestExampleModels:

    def test_listing_omits_documents(self):
        listing = get_all_models()
        assert len(listing) == len(EXAMPLE_MODELS)
        assert all("model" not in entry for entry in listing)

    @pytest.mark.parametrize("entry", EXAMPLE_MODELS, ids=lambda e: e["id"])
    def test_every_example_loads(self, entry):
        model = Model.from_dict(entry["model"])
        assert len(model) >= 1
        assert entry["profile"]["num_points"] >= 2

    def test_lookup_is_a_copy(self):
        entry = get_model_by_id("soil_void")
        entry["model"]["name"] = "changed"
        assert get_model_by_id("soil_void")["model"]["name"] == "soil_void"

    def test_lookup_missing(self):
        assert get_model_by_id("nope") is None
