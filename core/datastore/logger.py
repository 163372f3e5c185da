"""Logging for the data store, on logbook.

Stores log at DEBUG level on the `datastore` channel. Nothing is shown until
the application pushes a handler: the setup `setup_logging()` returns, its
own logbook handlers, or `list_handler()` in tests.
"""
import json
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

import logbook

import datastore.flags
from datastore.dataclass_schema import DataStoreClassMixin


TEXT_FORMAT = '{record.message}'
DEBUG_FORMAT = (
    '{record.time:%Y-%m-%d %H:%M:%S} ({record.thread_name}) '
    '[{record.channel}]: {record.message}'
)

GLOBAL_LOGGER = logbook.Logger('datastore')


@dataclass
class StoreLogRecord(DataStoreClassMixin):
    timestamp: datetime
    channel: str
    levelname: str
    message: str
    extra: Optional[Dict[str, Any]] = None
    exc_info: Optional[str] = None

    @classmethod
    def from_record(cls, record: logbook.LogRecord) -> 'StoreLogRecord':
        return cls(
            timestamp=record.time,
            channel=record.channel,
            levelname=record.level_name,
            message=record.message,
            extra=dict(record.extra) or None,
            exc_info=record.formatted_exception,
        )


def json_formatter(record: logbook.LogRecord, handler) -> str:
    """One JSON object per record."""
    return json.dumps(StoreLogRecord.from_record(record).to_dict(), default=str)


class OutputHandler(logbook.StreamHandler):
    """Writes records to a stream, as text (the default) or as JSON."""

    def __init__(self, stream, level=logbook.INFO, bubble=False) -> None:
        super().__init__(
            stream, level=level, format_string=TEXT_FORMAT, bubble=bubble
        )

    def use_text(self, format_string: str = TEXT_FORMAT) -> None:
        self.formatter = logbook.StringFormatter(format_string)

    def use_json(self) -> None:
        self.formatter = json_formatter


def setup_logging(stream=None) -> logbook.NestedSetup:
    """Build the handler setup for the current flags: `DEBUG` shows debug
    records in a timestamped format, `LOG_FORMAT` picks text or JSON.

    Push the result with `push_application()` or use it as a context
    manager. Records below the output level are dropped rather than passed
    on to logbook's default stderr handler.
    """
    handler = OutputHandler(sys.stdout if stream is None else stream)
    if datastore.flags.DEBUG:
        handler.level = logbook.DEBUG
        handler.use_text(DEBUG_FORMAT)
    if datastore.flags.LOG_FORMAT == 'json':
        handler.use_json()
    return logbook.NestedSetup([logbook.NullHandler(), handler])


class ListHandler(logbook.Handler):
    def __init__(self, records: List[StoreLogRecord], level=logbook.NOTSET):
        super().__init__(level=level, bubble=True)
        self.records = records

    def emit(self, record: logbook.LogRecord) -> None:
        self.records.append(StoreLogRecord.from_record(record))


def list_handler(
    records: Optional[List[StoreLogRecord]] = None, level=logbook.NOTSET
) -> ListHandler:
    """A handler that appends every record to `records`, as a
    `StoreLogRecord`. Use it as a context manager.
    """
    return ListHandler([] if records is None else records, level=level)
