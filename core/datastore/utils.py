import datetime
import decimal
import json
from typing import Any


DECIMALS = (decimal.Decimal,)


def is_sequence(value: Any) -> bool:
    """Return True for the list-like values that `create` and `serialize`
    fan out over. Strings, bytes and mappings are not sequences here.
    """
    return isinstance(value, (list, tuple))


class JSONEncoder(json.JSONEncoder):
    """A 'custom' json encoder that does normal json encoder things, but also
    handles `Decimal`s, dates and data stores. Decimals can lose precision
    because they get converted to floats.
    """
    def default(self, obj):
        # imported here to avoid a cycle: store imports this module
        from datastore.store import DataStore
        if isinstance(obj, DataStore):
            return obj.serialize()
        if isinstance(obj, DECIMALS):
            return float(obj)
        if isinstance(obj, (datetime.datetime, datetime.date)):
            return obj.isoformat()
        return super().default(obj)
