"""
Catalogue of example gravity models.

Each entry is a small buried-target scenario written in the persisted
model-document layout (see gravity.model), so it can be loaded with
Model.from_dict() exactly like a file saved by the editor.

Densities are contrasts against a soil background (kg/m^3):
    soil void -1800, concrete 2000, lead 11340, tungsten 19300

Each entry contains:
    id: unique identifier
    name: display name
    description: one-liner
    profile: suggested survey line {start, end, num_points}
    model: model document

IMPORTANT: No unicode characters (Windows charmap constraint).
"""

import copy


def _cuboid(object_id, name, colour, **params):
    return {
        "object": {"Cuboid": params},
        "name": name,
        "id": object_id,
        "colour": colour,
        "is_selected": False,
    }


def _sphere(object_id, name, colour, **params):
    return {
        "object": {"Sphere": params},
        "name": name,
        "id": object_id,
        "colour": colour,
        "is_selected": False,
    }


EXAMPLE_MODELS = [
    {
        "id": "concrete_block",
        "name": "Concrete block (10 m cube, top at 0.5 m depth)",
        "description": "Single dense cube directly beneath the survey origin",
        "profile": {"start": [-30.0, 0.0, 0.0], "end": [30.0, 0.0, 0.0], "num_points": 121},
        "model": {
            "name": "concrete_block",
            "objects": {
                "None": None,
                "0": _cuboid(
                    0, "Block", [160, 160, 160, 255],
                    x_length=10.0, y_length=10.0, z_length=10.0,
                    x_centroid=0.0, y_centroid=0.0, z_centroid=-5.5,
                    x_rotation=0.0, y_rotation=0.0, z_rotation=0.0,
                    density=2000.0,
                ),
            },
            "groups": {"None": None},
            "object_counter": 1,
        },
    },
    {
        "id": "soil_void",
        "name": "Spherical soil void (r = 1 m)",
        "description": "Shallow air-filled cavity, the classic negative anomaly",
        "profile": {"start": [-10.0, 0.0, 0.0], "end": [10.0, 0.0, 0.0], "num_points": 81},
        "model": {
            "name": "soil_void",
            "objects": {
                "None": None,
                "0": _sphere(
                    0, "Void", [200, 80, 80, 255],
                    x_centroid=0.0, y_centroid=0.0, z_centroid=-2.0,
                    radius=1.0, density=-1800.0,
                ),
            },
            "groups": {"None": None},
            "object_counter": 1,
        },
    },
    {
        "id": "buried_tunnel",
        "name": "Buried tunnel (2 x 2 m, 40 m long, oblique)",
        "description": "Long rectangular void crossing the survey line at an angle",
        "profile": {"start": [-20.0, 0.0, 0.0], "end": [20.0, 0.0, 0.0], "num_points": 161},
        "model": {
            "name": "buried_tunnel",
            "objects": {
                "None": None,
                "0": _cuboid(
                    0, "Tunnel", [90, 90, 200, 255],
                    x_length=2.0, y_length=40.0, z_length=2.0,
                    x_centroid=0.0, y_centroid=0.0, z_centroid=-4.0,
                    x_rotation=0.0, y_rotation=0.0, z_rotation=0.4,
                    density=-1800.0,
                ),
            },
            "groups": {"None": None, "voids": ["0"]},
            "object_counter": 1,
        },
    },
    {
        "id": "heavy_targets",
        "name": "Lead sphere and tungsten slab",
        "description": "Two dense targets of different shape at different depths",
        "profile": {"start": [-25.0, 0.0, 0.0], "end": [25.0, 0.0, 0.0], "num_points": 101},
        "model": {
            "name": "heavy_targets",
            "objects": {
                "None": None,
                "0": _sphere(
                    0, "Lead sphere", [120, 120, 140, 255],
                    x_centroid=-8.0, y_centroid=0.0, z_centroid=-3.0,
                    radius=1.5, density=11340.0,
                ),
                "1": _cuboid(
                    1, "Tungsten slab", [220, 200, 120, 255],
                    x_length=6.0, y_length=4.0, z_length=1.0,
                    x_centroid=8.0, y_centroid=0.0, z_centroid=-2.5,
                    x_rotation=0.2, y_rotation=0.0, z_rotation=0.0,
                    density=19300.0,
                ),
            },
            "groups": {"None": None, "spheres": ["0"], "slabs": ["1"]},
            "object_counter": 2,
        },
    },
]


def get_all_models():
    """Catalogue listing without the model documents."""
    return [
        {k: v for k, v in entry.items() if k != "model"}
        for entry in EXAMPLE_MODELS
    ]


def get_model_by_id(model_id):
    """Full catalogue entry (deep copy), or None if not found."""
    for entry in EXAMPLE_MODELS:
        if entry["id"] == model_id:
            return copy.deepcopy(entry)
    return None
