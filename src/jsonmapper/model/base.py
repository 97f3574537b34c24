from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, ClassVar, Self, dataclass_transform

from .._types import Undefined
from ..deserializing import DeserializationParams, deserialize, deserialize_array
from ..serializing import JsonValueType, SerializationParams, serialize
from .fields import JsonProperty

__all__ = [
    "ModelConfig",
    "JsonModel",
]


@dataclass(kw_only=True)
class ModelConfig:
    """
    Configures model.
    """

    default_deserialization_params: DeserializationParams | None = None
    """
    Params to use in `from_json()` if none are passed.
    """

    default_serialization_params: SerializationParams | None = None
    """
    Params to use in `to_json()` if none are passed.
    """


@dataclass_transform(kw_only_default=True, field_specifiers=(JsonProperty,))
class JsonModel:
    """
    Base class which transforms subclass to dataclass and provides mapping to/from
    JSON values.
    """

    model_config: ClassVar[ModelConfig | None] = None
    """
    Set on subclass to configure this model.
    """

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        dataclass(cls, kw_only=True)

    @classmethod
    def from_json(
        cls, obj: Any, /, *, params: DeserializationParams | None = None
    ) -> Self | None | Undefined:
        """
        Create instance of model from JSON object.
        """
        return deserialize(
            cls,
            obj,
            params=params or cls.__get_config().default_deserialization_params,
        )

    @classmethod
    def from_json_array(
        cls, objs: Iterable[Any], /, *, params: DeserializationParams | None = None
    ) -> list[Self | None | Undefined]:
        """
        Create instances of model from array of JSON objects.
        """
        return deserialize_array(
            cls,
            objs,
            params=params or cls.__get_config().default_deserialization_params,
        )

    def to_json(
        self, *, params: SerializationParams | None = None
    ) -> dict[str, JsonValueType]:
        """
        Dump model to dictionary of JSON-compatible values.
        """
        serialized = serialize(
            self,
            params=params or self.__get_config().default_serialization_params,
        )
        assert isinstance(serialized, dict)
        return serialized

    def model_copy(self, **changes: Any) -> Self:
        """
        Create a copy of this model with the given properties replaced.
        """
        return dataclasses.replace(self, **changes)

    @classmethod
    def __get_config(cls) -> ModelConfig:
        return cls.model_config or ModelConfig()
