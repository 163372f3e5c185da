from dataclasses import dataclass
from typing import Any, Callable, Collection, List, Optional

from datastore.contracts.util import Replaceable
from datastore.dataclass_schema import DataStoreClassMixin
from datastore.exceptions import raise_invalid_argument


def _as_list(
    names: Optional[Collection[str]], attr_name: str
) -> Optional[List[str]]:
    if names is None:
        return None
    if isinstance(names, str):
        raise_invalid_argument(
            '{} must be a collection of property names, not the string {!r}'
            .format(attr_name, names)
        )
    return list(names)


@dataclass
class PropertyPolicy(DataStoreClassMixin, Replaceable):
    """The allowed/disallowed property names of a store class.

    Both lists hold storage-normalized names. `None` means "no restriction"
    for that list, which is different from an empty list: an empty
    `allowed_properties` allows nothing.
    """
    allowed_properties: Optional[List[str]] = None
    disallowed_properties: Optional[List[str]] = None

    def allows(self, normalized_property: str) -> bool:
        if (
            self.allowed_properties is not None and
            normalized_property not in self.allowed_properties
        ):
            return False
        if (
            self.disallowed_properties is not None and
            normalized_property in self.disallowed_properties
        ):
            return False
        return True

    def normalized(self, normalize: Callable[[str], str]) -> 'PropertyPolicy':
        """Return a copy of this policy with every name passed through
        `normalize`, for policies written in a different casing than the
        store's storage keys.
        """
        def apply(names):
            if names is None:
                return None
            return [normalize(name) for name in names]

        return self.replace(
            allowed_properties=apply(self.allowed_properties),
            disallowed_properties=apply(self.disallowed_properties),
        )

    @classmethod
    def from_store_class(cls, store_class: Any) -> 'PropertyPolicy':
        return cls(
            allowed_properties=_as_list(
                getattr(store_class, 'allowed_properties', None),
                'allowed_properties',
            ),
            disallowed_properties=_as_list(
                getattr(store_class, 'disallowed_properties', None),
                'disallowed_properties',
            ),
        )
