"""The data store: a wrapper around a plain dict of properties.

Property names are normalized on the way in, so callers can use whatever
casing they like. Reads and writes go through optional per-property
overrides (see `datastore.contracts.overrides`), and writes are checked
against the store class' allowed/disallowed property names.

The get and set logic is written once, as generator "pipelines" that yield
each override call they need made as a `(function, args)` step and receive
the result back. `DataStore` runs those steps directly; `AsyncDataStore`
(in `datastore.async_store`) awaits their results.
"""
import json
from typing import (
    Any, ClassVar, Collection, Dict, Generator, Iterable, Mapping, NoReturn,
    Optional, Tuple
)

from datastore import casing
from datastore.contracts.overrides import OverrideFunction, OverrideRegistry
from datastore.contracts.policy import PropertyPolicy
from datastore.exceptions import (
    MultipleValidationError,
    ValidationError,
    ValidationErrorCode,
    raise_invalid_argument,
    raise_not_a_store,
    raise_validation_error,
)
from datastore.logger import GLOBAL_LOGGER as logger
from datastore.utils import JSONEncoder, is_sequence


Step = Tuple[OverrideFunction, Tuple[Any, ...]]
Pipeline = Generator[Step, Any, Any]

_EMPTY: Mapping[str, Any] = {}


def check_property_name(property) -> None:
    if not isinstance(property, str):
        raise_invalid_argument('property name must be a string')


def check_properties(properties) -> None:
    if not isinstance(properties, Mapping):
        raise_invalid_argument('properties must be an object')


def advance(pipeline: Pipeline, result: Any = None) -> Tuple[bool, Any]:
    """Send the result of the last step into a pipeline. Returns
    `(False, next_step)` while the pipeline has steps left and
    `(True, return_value)` once it has finished.
    """
    try:
        step = pipeline.send(result)
    except StopIteration as stop:
        return True, stop.value
    return False, step


class BaseDataStore:
    """Everything the sync and async stores share: construction, policy,
    name normalization and the get/set pipelines.

    Subclasses customize a store by:

    - setting `allowed_properties` and/or `disallowed_properties` to a
      collection of storage-normalized property names
    - defining `get_<name>(self)`, `set_<name>(self, value)` or
      `validate_<name>(self, value)` methods
    - setting `overrides` to an `OverrideRegistry`
    - overriding `normalize_property_for_storage` or
      `normalize_property_for_serialization`

    Override methods and registries are collected once, when the subclass is
    created.
    """
    allowed_properties: ClassVar[Optional[Collection[str]]] = None
    disallowed_properties: ClassVar[Optional[Collection[str]]] = None
    overrides: ClassVar[Optional[OverrideRegistry]] = None

    _registry: ClassVar[OverrideRegistry] = OverrideRegistry()

    ValidationError = ValidationError

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        layers = [OverrideRegistry.from_class(cls)]
        explicit = cls.__dict__.get('overrides')
        if explicit is not None:
            layers.append(explicit)
        cls._registry = cls._registry.merged(*layers)

    def __init__(self, data: Any = _EMPTY) -> None:
        if isinstance(data, BaseDataStore):
            data = data._export()
        elif not isinstance(data, Mapping):
            raise_invalid_argument('DataStore data must be an object')

        self.data: Dict[str, Any] = {}
        for property, value in data.items():
            check_property_name(property)
            self.data[self.normalize_property_for_storage(property)] = value

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self.data)

    def raw(self) -> Dict[str, Any]:
        """Return the live data dict of this store. Anything written to it
        directly should use `normalize_property_for_storage` keys.
        """
        return self.data

    def set(self, *args):
        """Set one property, `store.set(property, value)`, or several,
        `store.set({property: value, ...})`.
        """
        if len(args) == 1:
            return self._set_many(args[0])
        if len(args) == 2:
            return self._set_one(args[0], args[1])
        raise_invalid_argument(
            'set() takes a property and a value, or a single mapping of '
            'properties ({} arguments given)'.format(len(args))
        )

    def invalidate(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: str = ValidationErrorCode.PropertyValidation,
    ) -> NoReturn:
        raise_validation_error(message, details, code)

    def _get_pipeline(self, property) -> Pipeline:
        check_property_name(property)
        getter = self._registry.lookup(property).getter
        if getter is not None:
            logger.debug(
                '{}: using getter override for "{}"'
                .format(type(self).__name__, property)
            )
            # the getter does its own key access, so no normalization here
            return (yield getter, ())
        return self.data.get(self.normalize_property_for_storage(property))

    def _set_one_pipeline(self, property, value) -> Pipeline:
        check_property_name(property)
        normalized = self.normalize_property_for_storage(property)
        if not self.is_allowed_property(normalized):
            logger.debug(
                '{}: rejected disallowed property "{}"'
                .format(type(self).__name__, normalized)
            )
            self.invalidate(
                '{}.{} is not an allowed property name'.format(
                    type(self).__name__, normalized
                ),
                {},
                ValidationErrorCode.DisallowedProperty,
            )

        overrides = self._registry.lookup(property)
        if overrides.validator is not None:
            yield overrides.validator, (value,)
        if overrides.setter is not None:
            logger.debug(
                '{}: using setter override for "{}"'
                .format(type(self).__name__, property)
            )
            return (yield overrides.setter, (value,))

        self.data[normalized] = value
        return value

    def _raise_batch_failure(self, errors) -> NoReturn:
        logger.debug(
            '{}: {} of the properties in a batch set failed'
            .format(type(self).__name__, len(errors))
        )
        raise MultipleValidationError(errors)

    def _assemble_serialized(
        self, entries: Iterable[Tuple[str, Any]]
    ) -> Dict[str, Any]:
        result = {}
        for property, value in entries:
            result[self.normalize_property_for_serialization(property)] = value
        return result

    def _export(self) -> Mapping[str, Any]:
        """The data another store reads when it is constructed from this
        one.
        """
        return self._assemble_serialized(self.data.items())

    @classmethod
    def create(cls, data: Any = _EMPTY):
        """Create a store from `data`, or a list of stores if `data` is a
        list or tuple (one store per item).
        """
        if is_sequence(data):
            return [cls(item) for item in data]
        return cls(data)

    @classmethod
    def normalize_property_for_storage(cls, property: str) -> str:
        return casing.camelback(property)

    @classmethod
    def normalize_property_for_serialization(cls, property: str) -> str:
        return property

    @classmethod
    def is_allowed_property(cls, normalized_property: str) -> bool:
        return PropertyPolicy.from_store_class(cls).allows(normalized_property)


class DataStore(BaseDataStore):
    """A data store whose overrides all return plain values."""

    def _run(self, pipeline: Pipeline) -> Any:
        done, step = advance(pipeline)
        while not done:
            func, args = step
            done, step = advance(pipeline, func(self, *args))
        return step

    def get(self, property: str) -> Any:
        """Get the value of a property. A getter override wins over the
        stored value; a missing property is None.
        """
        return self._run(self._get_pipeline(property))

    def _set_one(self, property: str, value: Any) -> Any:
        return self._run(self._set_one_pipeline(property, value))

    def _set_many(self, properties: Mapping[str, Any]) -> Mapping[str, Any]:
        check_properties(properties)
        # every property is attempted, failures are raised together at the
        # end
        errors = []
        for property, value in properties.items():
            try:
                self._set_one(property, value)
            except Exception as exc:
                errors.append(exc)
        if errors:
            self._raise_batch_failure(errors)
        return properties

    def serialize(self) -> Dict[str, Any]:
        """Return a plain dict copy of this store, reading every property
        through `get` so getter overrides are honored.
        """
        return self._assemble_serialized(
            [(property, self.get(property)) for property in list(self.data)]
        )

    def _export(self) -> Mapping[str, Any]:
        return self.serialize()

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.serialize(), cls=JSONEncoder, **kwargs)


def serialize(data_store):
    """Serialize a store, or a list of stores."""
    if is_sequence(data_store):
        for item in data_store:
            if not isinstance(item, DataStore):
                raise_not_a_store()
        return [item.serialize() for item in data_store]
    if not isinstance(data_store, DataStore):
        raise_not_a_store()
    return data_store.serialize()


def create(data: Any = _EMPTY):
    return DataStore.create(data)
