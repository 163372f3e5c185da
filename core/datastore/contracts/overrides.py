"""Per-property override functions.

An override replaces the store's default behavior for one property:

- a getter is called as `getter(store)` and its result is what `get` returns
- a setter is called as `setter(store, value)` and is responsible for
  persisting the value; its result is what `set` returns
- a validator is called as `validator(store, value)` before the value is
  written and rejects it by raising

Overrides are keyed by the underscore form of the property name, so every
spelling of a property, including the camelback key it is stored under,
shares one set of overrides.
"""
import re
from dataclasses import dataclass
from typing import (
    Any, Callable, Dict, Iterator, Mapping, Optional, Type
)

from datastore import casing
from datastore.contracts.util import Mergeable
from datastore.dataclass_schema import StrEnum
from datastore.exceptions import raise_invalid_argument

OverrideFunction = Callable[..., Any]


class OverrideKind(StrEnum):
    Getter = 'get'
    Setter = 'set'
    Validator = 'validate'

    @property
    def field_name(self) -> str:
        return {
            OverrideKind.Getter: 'getter',
            OverrideKind.Setter: 'setter',
            OverrideKind.Validator: 'validator',
        }[self]


# matches `get_scientific_name`, `set_scientific_name`,
# `validate_scientific_name`
OVERRIDE_METHOD_PATTERN = re.compile(r'^(get|set|validate)_(.+)$')


@dataclass(frozen=True)
class PropertyOverrides(Mergeable):
    getter: Optional[OverrideFunction] = None
    setter: Optional[OverrideFunction] = None
    validator: Optional[OverrideFunction] = None

    def get(self, kind: OverrideKind) -> Optional[OverrideFunction]:
        return getattr(self, kind.field_name)


NO_OVERRIDES = PropertyOverrides()


def override_key(name: str) -> str:
    # through camelback first, so a stored key and the spelling it was
    # stored from share a key (`2_3` and `23` are both `23`)
    return casing.underscore(casing.camelback(name))


def _method_caller(method_name: str) -> OverrideFunction:
    """Wrap a method name as an override function. The method is looked up
    on the store when the override runs, so patching the method on the class
    is honored.
    """
    def call_method(store, *args):
        return getattr(store, method_name)(*args)

    call_method.__name__ = method_name
    return call_method


class OverrideRegistry:
    """A mapping of property name to the `PropertyOverrides` for it.

    Functions can be registered directly or with the decorators:

        registry = OverrideRegistry()

        @registry.validator('scientific_name')
        def check_scientific_name(store, value):
            if not value:
                store.invalidate('scientific name is required')
    """
    def __init__(
        self, entries: Optional[Mapping[str, PropertyOverrides]] = None
    ) -> None:
        self._entries: Dict[str, PropertyOverrides] = {}
        if entries is not None:
            for name, entry in entries.items():
                key = override_key(name)
                current = self._entries.get(key, NO_OVERRIDES)
                self._entries[key] = current.merged(entry)

    def register(
        self, kind: OverrideKind, name: str, func: OverrideFunction
    ) -> OverrideFunction:
        if not callable(func):
            raise_invalid_argument(
                '{} override for "{}" must be callable, got {!r}'
                .format(kind, name, func)
            )
        key = override_key(name)
        current = self._entries.get(key, NO_OVERRIDES)
        self._entries[key] = current.replace(**{kind.field_name: func})
        return func

    def _decorator(self, kind: OverrideKind, name: str):
        def decorator(func: OverrideFunction) -> OverrideFunction:
            return self.register(kind, name, func)
        return decorator

    def getter(self, name: str):
        return self._decorator(OverrideKind.Getter, name)

    def setter(self, name: str):
        return self._decorator(OverrideKind.Setter, name)

    def validator(self, name: str):
        return self._decorator(OverrideKind.Validator, name)

    def lookup(self, name: str) -> PropertyOverrides:
        return self._entries.get(override_key(name), NO_OVERRIDES)

    def merged(self, *others: 'OverrideRegistry') -> 'OverrideRegistry':
        """Return a new registry with the overrides of `others` layered over
        this one's. Later registries win, per override kind.
        """
        result = OverrideRegistry(self._entries)
        for other in others:
            for key, entry in other._entries.items():
                current = result._entries.get(key, NO_OVERRIDES)
                result._entries[key] = current.merged(entry)
        return result

    @classmethod
    def from_class(cls, klass: Type) -> 'OverrideRegistry':
        """Collect the `get_<name>`, `set_<name>` and `validate_<name>`
        methods defined on `klass` itself. Inherited methods are left to the
        base class' registry, so a subclass does not reorder them against
        the base class' explicit overrides. Non-callable attributes are
        skipped.
        """
        registry = cls()
        for attr_name in vars(klass):
            match = OVERRIDE_METHOD_PATTERN.match(attr_name)
            if match is None or not callable(getattr(klass, attr_name)):
                continue
            kind = OverrideKind(match.group(1))
            registry.register(kind, match.group(2), _method_caller(attr_name))
        return registry

    def __contains__(self, name: str) -> bool:
        return override_key(name) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self):
        return 'OverrideRegistry({!r})'.format(self._entries)
