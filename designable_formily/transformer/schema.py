"""Form schema wrapper with ordered property access.

A ``Schema`` wraps a plain JSON-Schema-like mapping as consumed by the form
runtime. Nested ``properties`` and ``items`` are wrapped recursively so the
converters can walk them without caring about missing keys, and every other
attribute (validation rules, UI hints, ``x-*`` extensions) is carried through
untouched.
"""

import copy
from typing import Any, Callable, Iterator, Mapping, TypeVar


SCHEMA_VERSION = "2.0"

DESIGNABLE_ID_KEY = "_designableId"
INDEX_KEY = "x-index"
# Markers stamped by to_json(); not part of a stored document
VERSION_KEY = "version"
SCHEMA_OBJECT_MARKER = "_isJSONSchemaObject"

T = TypeVar("T")


class Schema:
    """Schema node: attribute bag plus ``properties`` and ``items`` slots."""

    def __init__(self, json: "Mapping[str, Any] | Schema | None" = None, parent: "Schema | None" = None):
        self.parent = parent
        self.root: Schema = parent.root if parent is not None else self
        self.attributes: dict[str, Any] = {}
        self.properties: dict[str, Schema] | None = None
        self.items: Schema | list[Schema] | None = None
        self.from_json(json if json is not None else {})

    def __repr__(self) -> str:
        return f"Schema({self.to_json()!r})"

    def __getitem__(self, key: str) -> Any:
        return self.attributes[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self.attributes

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    @property
    def type(self) -> Any:
        return self.attributes.get("type")

    @property
    def name(self) -> Any:
        return self.attributes.get("name")

    @property
    def designable_id(self) -> Any:
        return self.attributes.get(DESIGNABLE_ID_KEY)

    @designable_id.setter
    def designable_id(self, value: Any) -> None:
        self.attributes[DESIGNABLE_ID_KEY] = value

    @property
    def index(self) -> int | None:
        value = self.attributes.get(INDEX_KEY)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return None

    def from_json(self, json: "Mapping[str, Any] | Schema") -> "Schema":
        """Load attributes, properties and items from a plain mapping."""
        if isinstance(json, Schema):
            json = json.to_json()
        if not isinstance(json, Mapping):
            raise TypeError(f"Schema expects a mapping, got {type(json).__name__}")

        for key, value in json.items():
            if key == "properties":
                for prop_key, prop_schema in (value or {}).items():
                    self.add_property(prop_key, prop_schema)
            elif key == "items":
                self.set_items(value)
            elif key in (VERSION_KEY, SCHEMA_OBJECT_MARKER):
                continue
            else:
                self.attributes[key] = copy.deepcopy(value)
        return self

    def add_property(self, key: str, schema: "Mapping[str, Any] | Schema") -> "Schema":
        """Attach a named child schema; its ``name`` becomes the key."""
        if self.properties is None:
            self.properties = {}
        child = Schema(schema, self)
        child["name"] = key
        self.properties[key] = child
        return child

    def set_items(self, items: Any) -> "Schema | list[Schema] | None":
        """Set the element template (or tuple templates) of an array schema."""
        if items is None:
            self.items = None
        elif isinstance(items, (list, tuple)):
            self.items = [Schema(item, self) for item in items]
        else:
            self.items = Schema(items, self)
        return self.items

    def iter_properties(self) -> Iterator[tuple[str, "Schema"]]:
        """Yield (key, schema) pairs ordered by ``x-index``.

        Properties with a distinct integer index come first in index order.
        Properties without one, or whose index is already taken, follow in
        insertion order.
        """
        ordered: dict[int, tuple[str, Schema]] = {}
        unordered: list[tuple[str, Schema]] = []
        for key, schema in (self.properties or {}).items():
            index = schema.index
            if index is None or index in ordered:
                unordered.append((key, schema))
            else:
                ordered[index] = (key, schema)
        for index in sorted(ordered):
            yield ordered[index]
        yield from unordered

    def map_properties(self, callback: Callable[["Schema", str], T]) -> list[T]:
        return [callback(schema, key) for key, schema in self.iter_properties()]

    def to_json(self, recursion: bool = True) -> dict[str, Any]:
        """Serialize to a plain dict.

        Args:
            recursion: Include ``properties`` and ``items``. With False only
                this node's own attributes are returned.
        """
        result: dict[str, Any] = {
            VERSION_KEY: SCHEMA_VERSION,
            SCHEMA_OBJECT_MARKER: True,
        }
        result.update(copy.deepcopy(self.attributes))
        if not recursion:
            return result

        if self.properties is not None:
            result["properties"] = {
                key: schema.to_json() for key, schema in self.properties.items()
            }
        if isinstance(self.items, list):
            result["items"] = [item.to_json() for item in self.items]
        elif self.items is not None:
            result["items"] = self.items.to_json()
        return result
