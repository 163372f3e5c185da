import io
import json
import unittest

from datastore import flags
from datastore.logger import (
    GLOBAL_LOGGER as logger,
    OutputHandler,
    list_handler,
    setup_logging,
)
from datastore.exceptions import ValidationError
from datastore.store import DataStore


class TestListHandler(unittest.TestCase):

    def test_captures_store_debug_logs(self):
        class Restricted(DataStore):
            disallowed_properties = ['id']

        records = []
        with list_handler(records):
            with self.assertRaises(ValidationError):
                Restricted().set('id', 1)
        messages = [r.message for r in records]
        self.assertIn('Restricted: rejected disallowed property "id"', messages)
        self.assertEqual(records[0].channel, 'datastore')
        self.assertEqual(records[0].levelname, 'DEBUG')

    def test_captures_override_dispatch(self):
        class Store(DataStore):
            def get_name(self):
                return 'fox'

        records = []
        with list_handler(records):
            Store().get('name')
        self.assertEqual(
            [r.message for r in records],
            ['Store: using getter override for "name"'],
        )


class TestOutputHandler(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.handler = OutputHandler(self.stream)

    def test_text_output(self):
        with self.handler.applicationbound():
            logger.info('hello')
        self.assertEqual(self.stream.getvalue(), 'hello\n')

    def test_json_output(self):
        self.handler.use_json()
        with self.handler.applicationbound():
            logger.info('hello', extra={'store': 'Species'})
        data = json.loads(self.stream.getvalue())
        self.assertEqual(data['message'], 'hello')
        self.assertEqual(data['channel'], 'datastore')
        self.assertEqual(data['levelname'], 'INFO')
        self.assertEqual(data['extra'], {'store': 'Species'})
        self.assertNotIn('exc_info', data)


class TestSetupLogging(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()

    def tearDown(self):
        flags.reset()

    def test_defaults_hide_debug(self):
        flags.DEBUG = False
        flags.LOG_FORMAT = 'text'
        with setup_logging(self.stream).applicationbound():
            logger.debug('hidden')
            logger.info('shown')
        self.assertEqual(self.stream.getvalue(), 'shown\n')

    def test_debug_flag(self):
        flags.DEBUG = True
        flags.LOG_FORMAT = 'text'
        with setup_logging(self.stream).applicationbound():
            logger.debug('visible')
        self.assertIn('[datastore]: visible', self.stream.getvalue())

    def test_json_flag(self):
        flags.DEBUG = True
        flags.LOG_FORMAT = 'json'
        with setup_logging(self.stream).applicationbound():
            logger.debug('visible')
        lines = self.stream.getvalue().splitlines()
        self.assertEqual(json.loads(lines[-1])['levelname'], 'DEBUG')
