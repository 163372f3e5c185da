"""Build store classes by composition instead of subclassing by hand."""
from typing import Any, Mapping, Optional, Type, Union

from datastore.contracts.overrides import OverrideRegistry, PropertyOverrides
from datastore.contracts.policy import PropertyPolicy
from datastore.dataclass_schema import ValidationError
from datastore.exceptions import (
    InvalidArgumentException,
    raise_invalid_argument,
    validator_error_message,
)
from datastore.logger import GLOBAL_LOGGER as logger
from datastore.store import BaseDataStore, DataStore


PolicyInput = Union[PropertyPolicy, Mapping[str, Any]]
OverridesInput = Union[OverrideRegistry, Mapping[str, PropertyOverrides]]


def policy_from_data(name: str, data: Mapping[str, Any]) -> PropertyPolicy:
    try:
        return PropertyPolicy.validated_from_dict(dict(data))
    except ValidationError as exc:
        raise InvalidArgumentException(
            'Invalid property policy for "{}": {}'
            .format(name, validator_error_message(exc))
        ) from exc


def define_store(
    name: str,
    policy: Optional[PolicyInput] = None,
    overrides: Optional[OverridesInput] = None,
    base: Type[BaseDataStore] = DataStore,
    **attrs: Any,
) -> Type[BaseDataStore]:
    """Create a new store class called `name`.

    `policy` replaces the base class' allowed/disallowed property names. It
    may be a `PropertyPolicy` or a plain dict with `allowed_properties`
    and/or `disallowed_properties` keys; names in it are normalized with the
    new class' storage normalization. `overrides` is layered over the base
    class' overrides. Any other keyword arguments become class attributes.
    """
    if not (isinstance(base, type) and issubclass(base, BaseDataStore)):
        raise_invalid_argument(
            'base must be a DataStore class, got {!r}'.format(base)
        )
    if isinstance(policy, Mapping):
        policy = policy_from_data(name, policy)
    elif policy is not None and not isinstance(policy, PropertyPolicy):
        raise_invalid_argument(
            'policy must be a PropertyPolicy or a dict, got {!r}'
            .format(policy)
        )
    if isinstance(overrides, Mapping):
        overrides = OverrideRegistry(overrides)
    elif overrides is not None and not isinstance(overrides, OverrideRegistry):
        raise_invalid_argument(
            'overrides must be an OverrideRegistry or a dict, got {!r}'
            .format(overrides)
        )

    namespace = dict(attrs)
    namespace['overrides'] = overrides
    store_class = type(name, (base,), namespace)

    if policy is not None:
        policy = policy.normalized(store_class.normalize_property_for_storage)
        store_class.allowed_properties = policy.allowed_properties
        store_class.disallowed_properties = policy.disallowed_properties

    logger.debug(
        'Defined data store "{}" (base {}, {} overridden properties)'
        .format(name, base.__name__, len(store_class._registry))
    )
    return store_class
