"""
Tests for deserialization of JSON values to typed objects.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Annotated, Any

from jsonmapper import (
    UNDEFINED,
    BaseCustomConverter,
    DeserializationParams,
    JsonProperty,
    deserialize,
    deserialize_array,
    map_from_json,
)


@dataclass
class Item:
    x: int = 0


@dataclass
class Basic:
    a: int = 0
    b: str = ""


@dataclass
class Renamed:
    value: int = JsonProperty("v", default=0)
    other: Annotated[str, "o"] = ""


@dataclass
class Nested:
    item: Item | None = None
    basic: Basic | None = None


@dataclass
class Arrays:
    items: list[Item] = field(default_factory=list)
    tagged: list = JsonProperty(nested_type=Item, default_factory=list)
    untyped: list = field(default_factory=list)
    anys: list[Any] = field(default_factory=list)
    ints: list[int] = field(default_factory=list)
    flags: list[bool] = field(default_factory=list)
    stamps: list[datetime] = field(default_factory=list)
    pairs: tuple[Item, ...] = ()


@dataclass
class Flags:
    flag: bool = False


@dataclass
class Dates:
    created: datetime | None = None
    day: date | None = None
    at: time | None = None


class RecordingConverter(BaseCustomConverter[Any, Any]):
    calls: list[Any] = []

    @classmethod
    def from_json(cls, obj: Any) -> Any:
        cls.calls.append(obj)
        return ("converted", obj)

    @classmethod
    def to_json(cls, obj: Any) -> Any:
        return obj


@dataclass
class Converted:
    items: list[Item] = JsonProperty(
        "list", nested_type=Item, custom_converter=RecordingConverter, default=None
    )


@dataclass
class Untyped:
    data: Any = None
    tagged: Any = JsonProperty(nested_type=Item, default=None)
    mapping: dict[str, int] | None = None


@dataclass
class WithNonInit:
    a: int = 0
    b: int = field(default=0, init=False)


@dataclass(frozen=True)
class Frozen:
    a: int = 0
    b: int = field(default=0, init=False)


@dataclass
class Required:
    a: int
    b: Item


class Plain:
    a: int
    item: Annotated[Item, "i"]


class PlainWithInit:
    a: int

    def __init__(self, a: int, b: str):
        self.a = a
        self.b = b


def test_null():
    """
    Test null is propagated and missing data resolves to `UNDEFINED`.
    """
    assert deserialize(Basic, None) is None
    assert deserialize(None, {"a": 1}) is UNDEFINED
    assert deserialize(Basic, UNDEFINED) is UNDEFINED


def test_basic():
    """
    Test mapping of scalar properties.
    """
    obj = deserialize(Basic, {"a": 1, "b": "abc"})
    assert isinstance(obj, Basic)
    assert obj.a == 1
    assert obj.b == "abc"


def test_missing_and_extra():
    """
    Test missing keys yield `UNDEFINED` and extra keys are ignored.
    """
    obj = deserialize(Basic, {})
    assert isinstance(obj, Basic)
    assert obj.a is UNDEFINED
    assert obj.b is UNDEFINED

    obj = deserialize(Basic, {"a": 1, "c": 2})
    assert isinstance(obj, Basic)
    assert obj.a == 1
    assert obj.b is UNDEFINED
    assert not hasattr(obj, "c")

    # required fields are filled as well
    obj = deserialize(Required, {})
    assert isinstance(obj, Required)
    assert obj.a is UNDEFINED
    assert obj.b is UNDEFINED


def test_rename():
    """
    Test reading from renamed keys.
    """
    obj = deserialize(Renamed, {"v": 1, "o": "x", "value": 2, "other": "y"})
    assert isinstance(obj, Renamed)
    assert obj.value == 1
    assert obj.other == "x"


def test_nested():
    """
    Test recursion into composed properties.
    """
    obj = deserialize(Nested, {"item": {"x": 1}, "basic": None})
    assert isinstance(obj, Nested)
    assert obj.item == Item(x=1)
    assert obj.basic is None

    obj = deserialize(Nested, {"item": "garbage"})
    assert isinstance(obj, Nested)
    assert obj.item is UNDEFINED
    assert obj.basic is UNDEFINED


def test_scalar_for_object():
    """
    Test scalar where an object was expected is parsed as a date if possible.
    """
    assert deserialize(Item, "2024-03-15T10:30:00") == datetime(2024, 3, 15, 10, 30)
    assert deserialize(Item, 86_400_000) == datetime.fromtimestamp(86_400)
    assert deserialize(Item, "not a date") is UNDEFINED
    assert deserialize(Item, True) is UNDEFINED
    assert deserialize(Item, [{"x": 1}]) is UNDEFINED


def test_arrays():
    """
    Test arrays with declared element types are mapped element-wise.
    """
    obj = deserialize(
        Arrays,
        {
            "items": [{"x": 1}, {"x": 2}],
            "tagged": [{"x": 3}],
            "untyped": [{"x": 4}],
            "anys": [{"x": 5}],
            "ints": [1, 2, 3],
            "flags": [1, 0, True, "1"],
            "stamps": ["2024-03-15T10:30:00", "garbage"],
            "pairs": [{"x": 6}, None],
        },
    )
    assert isinstance(obj, Arrays)
    assert obj.items == [Item(x=1), Item(x=2)]
    assert obj.tagged == [Item(x=3)]
    assert obj.ints == [1, 2, 3]
    assert obj.flags == [True, False, True, True]
    assert obj.stamps == [datetime(2024, 3, 15, 10, 30), UNDEFINED]
    assert obj.pairs == [Item(x=6), None]

    # untyped arrays are passed through as-is
    assert obj.untyped == [{"x": 4}]
    assert obj.anys == [{"x": 5}]


def test_arrays_mismatch():
    """
    Test typed arrays which are missing or not arrays.
    """
    obj = deserialize(Arrays, {"items": {"x": 1}, "tagged": "abc", "untyped": 1})
    assert isinstance(obj, Arrays)
    assert obj.items is UNDEFINED
    assert obj.tagged is UNDEFINED
    assert obj.ints is UNDEFINED

    # untyped arrays pass through any value
    assert obj.untyped == 1


def test_top_level_array_type():
    """
    Test deserializing directly to an array type.
    """
    assert deserialize(list[Item], [{"x": 1}, {"x": 2}]) == [Item(x=1), Item(x=2)]
    assert deserialize(list[Item], {"x": 1}) is UNDEFINED
    assert deserialize(list, [{"x": 1}]) == [{"x": 1}]


def test_top_level_primitive_type():
    """
    Test deserializing directly to a primitive type.
    """
    assert deserialize(int, 5) == 5
    assert deserialize(str, "abc") == "abc"
    assert deserialize(bool, 1) is True
    assert deserialize(datetime, "2024-03-15") == datetime(2024, 3, 15)
    assert deserialize(Any, {"a": 1}) == {"a": 1}


def test_bool():
    """
    Test coercion of booleans from numeric and truthy representations.
    """

    def flag(json: dict[str, Any]) -> Any:
        obj = deserialize(Flags, json)
        assert isinstance(obj, Flags)
        return obj.flag

    assert flag({"flag": 1}) is True
    assert flag({"flag": True}) is True
    assert flag({"flag": "1"}) is True
    assert flag({"flag": 2}) is True
    assert flag({"flag": 0}) is False
    assert flag({"flag": False}) is False
    assert flag({"flag": 0.5}) is False
    assert flag({"flag": "abc"}) is False
    assert flag({"flag": None}) is False
    assert flag({}) is UNDEFINED


def test_dates():
    """
    Test parsing of date-like properties.
    """
    obj = deserialize(
        Dates, {"created": "2024-03-15T10:30:00Z", "day": "2024-03-15", "at": "10:30"}
    )
    assert isinstance(obj, Dates)
    assert obj.created == datetime.fromisoformat("2024-03-15T10:30:00+00:00")
    assert obj.day == date(2024, 3, 15)
    assert obj.at == time(10, 30)

    obj = deserialize(Dates, {"created": "garbage", "day": None, "at": 1})
    assert isinstance(obj, Dates)
    assert obj.created is UNDEFINED
    assert obj.day is None
    assert obj.at is UNDEFINED

    # passed through if parsing disabled
    obj = deserialize(
        Dates,
        {"created": "2024-03-15T10:30:00"},
        params=DeserializationParams(parse_dates=False),
    )
    assert isinstance(obj, Dates)
    assert obj.created == "2024-03-15T10:30:00"


def test_custom_converter():
    """
    Test custom converter takes precedence over nested type.
    """
    RecordingConverter.calls.clear()

    obj = deserialize(Converted, {"list": [{"x": 1}]})
    assert isinstance(obj, Converted)
    assert obj.items == ("converted", [{"x": 1}])

    # converter receives UNDEFINED for missing key
    obj = deserialize(Converted, {})
    assert isinstance(obj, Converted)
    assert obj.items == ("converted", UNDEFINED)

    assert RecordingConverter.calls == [[{"x": 1}], UNDEFINED]


def test_untyped():
    """
    Test untyped properties pass through, unless a nested type is declared.
    """
    obj = deserialize(
        Untyped,
        {"data": {"x": 1}, "tagged": {"x": 2}, "mapping": {"a": 1}},
    )
    assert isinstance(obj, Untyped)
    assert obj.data == {"x": 1}
    assert obj.tagged == Item(x=2)
    assert obj.mapping == {"a": 1}


def test_no_properties():
    """
    Test target types without declared properties take the JSON object as-is.
    """
    json = {"a": 1}
    assert deserialize(dict, json) is json


def test_non_init():
    """
    Test non-init fields are set after construction, also on frozen dataclasses.
    """
    obj = deserialize(WithNonInit, {"a": 1, "b": 2})
    assert isinstance(obj, WithNonInit)
    assert (obj.a, obj.b) == (1, 2)

    frozen = deserialize(Frozen, {"a": 1, "b": 2})
    assert isinstance(frozen, Frozen)
    assert (frozen.a, frozen.b) == (1, 2)


def test_plain_class():
    """
    Test annotated classes which aren't dataclasses.
    """
    obj = deserialize(Plain, {"a": 1, "i": {"x": 2}})
    assert isinstance(obj, Plain)
    assert obj.a == 1
    assert obj.item == Item(x=2)

    # __init__() requiring arguments is not called
    obj = deserialize(PlainWithInit, {"a": 1, "b": "abc"})
    assert isinstance(obj, PlainWithInit)
    assert obj.a == 1
    assert not hasattr(obj, "b")


def test_fresh_instances():
    """
    Test each call creates new instances.
    """
    json = {"item": {"x": 1}}
    obj1 = deserialize(Nested, json)
    obj2 = deserialize(Nested, json)
    assert isinstance(obj1, Nested) and isinstance(obj2, Nested)
    assert obj1 == obj2
    assert obj1 is not obj2
    assert obj1.item is not obj2.item


def test_deserialize_array():
    """
    Test element-wise deserialization without short-circuiting.
    """
    objs = deserialize_array(Item, [{"x": 1}, None, "garbage", {"x": 2}])
    assert objs == [Item(x=1), None, UNDEFINED, Item(x=2)]
    assert deserialize_array(Item, []) == []


def test_map_from_json():
    """
    Test mapping a single property.
    """
    assert map_from_json(Renamed, {"v": 1}, "value") == 1
    assert map_from_json(Renamed, {"value": 1}, "value") is UNDEFINED
    assert map_from_json(Nested, {"item": {"x": 1}}, "item") == Item(x=1)
