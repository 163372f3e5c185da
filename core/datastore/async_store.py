"""A data store whose overrides may be coroutines.

`AsyncDataStore` runs the same get/set pipelines as `DataStore`, but every
public operation is a coroutine and any awaitable an override returns is
awaited before the pipeline continues. That includes validators, so an
async validator always finishes before the setter or the write happens.
"""
import asyncio
import inspect
import json
from typing import Any, Dict, Mapping, Optional

from datastore.exceptions import raise_not_a_store
from datastore.store import (
    BaseDataStore,
    Pipeline,
    advance,
    check_properties,
)
from datastore.utils import JSONEncoder, is_sequence


class AsyncDataStore(BaseDataStore):

    async def _run(self, pipeline: Pipeline) -> Any:
        done, step = advance(pipeline)
        while not done:
            func, args = step
            result = func(self, *args)
            if inspect.isawaitable(result):
                result = await result
            done, step = advance(pipeline, result)
        return step

    async def get(self, property: str) -> Any:
        return await self._run(self._get_pipeline(property))

    async def _set_one(self, property: str, value: Any) -> Any:
        return await self._run(self._set_one_pipeline(property, value))

    async def _attempt_set_one(
        self, property: str, value: Any
    ) -> Optional[Exception]:
        try:
            await self._set_one(property, value)
        except Exception as exc:
            return exc
        return None

    async def _set_many(
        self, properties: Mapping[str, Any]
    ) -> Mapping[str, Any]:
        """Set every property concurrently. A failing property does not
        cancel the others: all of them run to completion, then the failures
        (in input order) are raised together.
        """
        check_properties(properties)
        outcomes = await asyncio.gather(*(
            self._attempt_set_one(property, value)
            for property, value in properties.items()
        ))
        errors = [error for error in outcomes if error is not None]
        if errors:
            self._raise_batch_failure(errors)
        return properties

    async def serialize(self) -> Dict[str, Any]:
        properties = list(self.data)
        values = await asyncio.gather(*(
            self.get(property) for property in properties
        ))
        return self._assemble_serialized(zip(properties, values))

    async def to_json(self, **kwargs) -> str:
        return json.dumps(await self.serialize(), cls=JSONEncoder, **kwargs)


async def serialize_async(data_store):
    """Serialize a store or a list of stores, sync or async."""
    if is_sequence(data_store):
        for item in data_store:
            if not isinstance(item, BaseDataStore):
                raise_not_a_store()
        return list(await asyncio.gather(*(
            serialize_async(item) for item in data_store
        )))
    if not isinstance(data_store, BaseDataStore):
        raise_not_a_store()
    result = data_store.serialize()
    if inspect.isawaitable(result):
        result = await result
    return result
