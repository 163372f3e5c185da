from datastore.async_store import AsyncDataStore, serialize_async  # noqa
from datastore.contracts.overrides import (  # noqa
    OverrideRegistry,
    PropertyOverrides,
)
from datastore.contracts.policy import PropertyPolicy  # noqa
from datastore.exceptions import (  # noqa
    InvalidArgumentException,
    MultipleValidationError,
    ValidationError,
    ValidationErrorCode,
)
from datastore.shape import define_store  # noqa
from datastore.store import BaseDataStore, DataStore, create, serialize  # noqa
from datastore.version import __version__  # noqa
