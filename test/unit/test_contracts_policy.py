import unittest

from datastore.contracts.policy import PropertyPolicy
from datastore.dataclass_schema import ValidationError
from datastore.exceptions import InvalidArgumentException


class TestPropertyPolicy(unittest.TestCase):

    def test_unrestricted(self):
        self.assertTrue(PropertyPolicy().allows('mockProperty1'))

    def test_allowed_includes_property(self):
        policy = PropertyPolicy(allowed_properties=['mockProperty1'])
        self.assertTrue(policy.allows('mockProperty1'))

    def test_allowed_does_not_include_property(self):
        policy = PropertyPolicy(allowed_properties=['mockProperty2'])
        self.assertFalse(policy.allows('mockProperty1'))

    def test_empty_allowed_list_allows_nothing(self):
        self.assertFalse(PropertyPolicy(allowed_properties=[]).allows('a'))

    def test_disallowed_does_not_include_property(self):
        policy = PropertyPolicy(disallowed_properties=['mockProperty2'])
        self.assertTrue(policy.allows('mockProperty1'))

    def test_disallowed_includes_property(self):
        policy = PropertyPolicy(disallowed_properties=['mockProperty1'])
        self.assertFalse(policy.allows('mockProperty1'))

    def test_disallowed_wins_over_allowed(self):
        policy = PropertyPolicy(
            allowed_properties=['mockProperty1'],
            disallowed_properties=['mockProperty1'],
        )
        self.assertFalse(policy.allows('mockProperty1'))

    def test_normalized(self):
        policy = PropertyPolicy(
            allowed_properties=['A', 'B'], disallowed_properties=None
        )
        normalized = policy.normalized(str.lower)
        self.assertEqual(normalized.allowed_properties, ['a', 'b'])
        self.assertIsNone(normalized.disallowed_properties)
        # the original is untouched
        self.assertEqual(policy.allowed_properties, ['A', 'B'])

    def test_from_store_class(self):
        class Store:
            allowed_properties = ('a', 'b')

        policy = PropertyPolicy.from_store_class(Store)
        self.assertEqual(policy.allowed_properties, ['a', 'b'])
        self.assertIsNone(policy.disallowed_properties)

    def test_from_store_class_rejects_a_string(self):
        class Store:
            disallowed_properties = 'id'

        with self.assertRaises(InvalidArgumentException) as exc:
            PropertyPolicy.from_store_class(Store)
        self.assertIn('disallowed_properties', str(exc.exception))


class TestPropertyPolicySerialization(unittest.TestCase):

    def test_from_dict(self):
        policy = PropertyPolicy.validated_from_dict(
            {'disallowed_properties': ['id']}
        )
        self.assertEqual(policy, PropertyPolicy(disallowed_properties=['id']))

    def test_to_dict_omits_unset_lists(self):
        policy = PropertyPolicy(allowed_properties=['a'])
        self.assertEqual(policy.to_dict(), {'allowed_properties': ['a']})

    def test_rejects_wrong_types(self):
        with self.assertRaises(ValidationError):
            PropertyPolicy.validated_from_dict({'allowed_properties': 'a'})

    def test_rejects_unknown_keys(self):
        with self.assertRaises(ValidationError):
            PropertyPolicy.validated_from_dict({'allowed': ['a']})
