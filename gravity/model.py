"""
Model document: the persisted collection of bodies and named groups.

The forward model itself only consumes geometry parameters. UI-only
metadata (name, colour, selection flag, id) lives in ModelObject, which
WRAPS a core body instead of extending it, so bodies stay pure data.

Document layout (compatible with files saved by the desktop editor):

    {
      "name": "Default",
      "objects": {
        "None": null,
        "0": {"object": {"Cuboid": {...}}, "name": "...", "id": 0,
              "colour": [r, g, b, a], "is_selected": false}
      },
      "groups": {"None": null, "voids": ["0"]},
      "object_counter": 1
    }

The "None" entries are placeholders written by the editor; they are
accepted on input and written back on output.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import json
import logging
import os
import tempfile
from collections import OrderedDict

from gravity.constants import MAX_OBJECTS
from gravity.cuboid import Cuboid
from gravity.sphere import Sphere

log = logging.getLogger(__name__)

BODY_TYPES = OrderedDict([
    (Cuboid.type_name, Cuboid),
    (Sphere.type_name, Sphere),
])

PLACEHOLDER_KEY = "None"

DEFAULT_COLOUR = [128, 128, 128, 255]


def body_from_dict(data):
    """
    Build a body from its geometry parameters.

    Accepts the internal form {"type": "cuboid", "x_length": ...} and
    the editor's tagged form {"Cuboid": {"x_length": ...}}. Missing
    parameters take the body's defaults; unknown keys are ignored.

    Raises
    ------
    ValueError
        If the type is unknown or a parameter is invalid
        (DegenerateGeometryError for non-positive lengths/radius).
    """
    if not isinstance(data, dict):
        raise ValueError("Body must be a JSON object")
    if "type" in data:
        type_name = str(data["type"]).strip().lower()
        params = data
    elif len(data) == 1:
        tag, params = next(iter(data.items()))
        type_name = str(tag).strip().lower()
        if not isinstance(params, dict):
            raise ValueError("Body '{}' parameters must be a JSON object".format(tag))
    else:
        raise ValueError("Body type is required")

    cls = BODY_TYPES.get(type_name)
    if cls is None:
        raise ValueError(
            "Unknown body type '{}' (expected one of: {})".format(
                type_name, ", ".join(BODY_TYPES))
        )
    kwargs = {k: params[k] for k in cls.fields if k in params}
    return cls(**kwargs)


def body_to_tagged(body):
    """Editor's externally-tagged form: {"Cuboid": {...}}."""
    return {type(body).__name__: body.parameters()}


class ModelObject:
    """
    A body plus its editor metadata.

    Parameters
    ----------
    body : GravityBody
    name : str
    id : int
    colour : list of int
        RGBA, 0-255.
    is_selected : bool
    """

    def __init__(self, body, name="", id=0, colour=None, is_selected=False):
        self.body = body
        self.name = str(name)
        self.id = int(id)
        self.colour = list(colour) if colour is not None else list(DEFAULT_COLOUR)
        self.is_selected = bool(is_selected)

    def to_dict(self):
        return {
            "object": body_to_tagged(self.body),
            "name": self.name,
            "id": self.id,
            "colour": self.colour,
            "is_selected": self.is_selected,
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError("Model object must be a JSON object")
        if "object" not in data:
            raise ValueError("Model object is missing 'object'")
        body = body_from_dict(data["object"])
        try:
            return cls(
                body=body,
                name=data.get("name", ""),
                id=data.get("id", 0),
                colour=data.get("colour"),
                is_selected=data.get("is_selected", False),
            )
        except (TypeError, ValueError):
            raise ValueError(
                "Model object has a malformed 'id' or 'colour'"
            ) from None


class Model:
    """
    Named collection of ModelObjects and groups of their ids.

    Parameters
    ----------
    name : str
        Model name; also the file stem used by save_json().
    """

    def __init__(self, name="Default"):
        self.name = str(name)
        self.objects = OrderedDict()
        self.groups = OrderedDict()
        self.object_counter = 0

    def __len__(self):
        return len(self.objects)

    def add_object(self, obj):
        """
        Add an object under the next free id.

        Returns
        -------
        bool
            False (and nothing added) when the model already holds
            MAX_OBJECTS objects.
        """
        if len(self.objects) >= MAX_OBJECTS:
            log.info("Model '%s' is full (%d objects)", self.name, MAX_OBJECTS)
            return False
        obj.id = self.object_counter
        self.objects[str(obj.id)] = obj
        self.object_counter += 1
        return True

    def add_body(self, body, name="", colour=None):
        """Wrap a body in a ModelObject and add it. See add_object()."""
        return self.add_object(ModelObject(body, name=name, colour=colour))

    def remove_object(self, object_id):
        """Remove an object and drop it from every group. Returns the object."""
        obj = self.objects.pop(str(object_id))
        for members in self.groups.values():
            members.discard(str(object_id))
        return obj

    def set_group(self, group, object_ids):
        """Create or replace a named group. Unknown ids raise KeyError."""
        ids = set()
        for object_id in object_ids:
            key = str(object_id)
            if key not in self.objects:
                raise KeyError("No object with id {}".format(key))
            ids.add(key)
        self.groups[str(group)] = ids

    def bodies(self):
        """Core bodies in id order, ready for evaluation."""
        return [obj.body for obj in self.objects.values()]

    def group_bodies(self, group):
        """Bodies belonging to a named group, in id order."""
        members = self.groups[group]
        return [obj.body for key, obj in self.objects.items() if key in members]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self):
        objects = OrderedDict([(PLACEHOLDER_KEY, None)])
        for key, obj in self.objects.items():
            objects[key] = obj.to_dict()
        groups = OrderedDict([(PLACEHOLDER_KEY, None)])
        for name, members in self.groups.items():
            groups[name] = sorted(members, key=_id_sort_key)
        return {
            "name": self.name,
            "objects": objects,
            "groups": groups,
            "object_counter": self.object_counter,
        }

    @classmethod
    def from_dict(cls, data):
        """
        Parse a model document.

        Raises
        ------
        ValueError
            If the document or any body in it is malformed.
        """
        if not isinstance(data, dict):
            raise ValueError("Model document must be a JSON object")
        model = cls(name=data.get("name", "Default"))
        objects = data.get("objects") or {}
        if not isinstance(objects, dict):
            raise ValueError("Model 'objects' must be a JSON object")
        for key in sorted(objects, key=_id_sort_key):
            entry = objects[key]
            if entry is None:
                continue
            model.objects[str(key)] = ModelObject.from_dict(entry)
        if len(model.objects) > MAX_OBJECTS:
            raise ValueError(
                "Model holds {} objects; the limit is {}".format(len(model.objects), MAX_OBJECTS)
            )

        groups = data.get("groups") or {}
        if not isinstance(groups, dict):
            raise ValueError("Model 'groups' must be a JSON object")
        for name, members in groups.items():
            if members is None:
                continue
            if not isinstance(members, list):
                raise ValueError("Group '{}' must be a list of object ids".format(name))
            model.groups[name] = {str(m) for m in members if str(m) in model.objects}

        next_id = max((obj.id + 1 for obj in model.objects.values()), default=0)
        try:
            counter = int(data.get("object_counter", 0))
        except (TypeError, ValueError):
            raise ValueError("Model 'object_counter' must be an integer") from None
        model.object_counter = max(counter, next_id)
        return model

    def to_json(self, indent=None):
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as err:
            raise ValueError("Model document is not valid JSON: {}".format(err)) from None
        return cls.from_dict(data)

    def save_json(self, directory):
        """
        Write <directory>/<name>.json atomically. Returns the path.

        Raises
        ------
        OSError
            If the directory cannot be created or written.
        """
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
            final_path = os.path.join(directory, self.name + ".json")
            os.replace(tmp_path, final_path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        log.info("Saved model '%s' to %s", self.name, final_path)
        return final_path

    @classmethod
    def load_json(cls, path):
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_json(f.read())


def _id_sort_key(key):
    """Numeric ids sort numerically, anything else after them by name."""
    key = str(key)
    return (0, int(key), "") if key.isdigit() else (1, 0, key)
