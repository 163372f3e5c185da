from typing import ClassVar
from enum import Enum

from hologram import JsonSchemaMixin, ValidationError  # noqa: F401

from mashumaro import DataClassDictMixin
from mashumaro.types import SerializableType


# This class pulls in both JsonSchemaMixin from Hologram and
# DataClassDictMixin from Mashumaro. The 'to_dict' and 'from_dict' methods
# come from Mashumaro. Building jsonschemas for every class and the
# 'validate' method come from Hologram.
class DataStoreClassMixin(DataClassDictMixin, JsonSchemaMixin):
    """Mixin which adds methods to generate a JSON schema and
       convert to and from JSON encodable dicts with validation
       against the schema
    """

    ADDITIONAL_PROPERTIES: ClassVar[bool] = False

    # This is called by the mashumaro to_dict in order to handle
    # nested classes.
    # Munges the dict that's returned.
    def __post_serialize__(self, dct):
        return {k: v for k, v in dct.items() if v is not None}

    @classmethod
    def validated_from_dict(cls, data):
        """Validate `data` against this class' JSON schema, then build an
        instance from it. Raises hologram's ValidationError.
        """
        cls.validate(data)
        return cls.from_dict(data)


# These classes must be in this order or it doesn't work
class StrEnum(str, SerializableType, Enum):
    def __str__(self):
        return self.value

    # https://docs.python.org/3.6/library/enum.html#using-automatic-values
    def _generate_next_value_(name, *_):
        return name

    def _serialize(self) -> str:
        return self.value

    @classmethod
    def _deserialize(cls, value: str):
        return cls(value)
