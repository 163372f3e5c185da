import unittest

import pytest

from datastore import casing


class TestSplit(unittest.TestCase):

    def test__simple_cases(self):
        cases = [
            ('scientific_name', ['scientific', 'name']),
            ('scientific-name', ['scientific', 'name']),
            ('ScientificName', ['scientific', 'name']),
            ('scientificName', ['scientific', 'name']),
            ('scientific name', ['scientific', 'name']),
            ('SCIENTIFIC_NAME', ['scientific', 'name']),
            ('HTMLParser', ['html', 'parser']),
            ('pointXY', ['point', 'x', 'y']),
            ('parseHTML', ['parse', 'h', 't', 'm', 'l']),
            ('1A', ['1', 'a']),
            ('mock-property-1', ['mock', 'property', '1']),
            ('__private__', ['private']),
            ('', []),
            ('---', []),
        ]
        for name, expected in cases:
            self.assertEqual(casing.split(name), expected, name)


class TestConversions(unittest.TestCase):

    def test_camelback(self):
        self.assertEqual(casing.camelback('mock-property-1'), 'mockProperty1')
        self.assertEqual(casing.camelback('scientific_name'), 'scientificName')
        self.assertEqual(casing.camelback('ScientificName'), 'scientificName')
        self.assertEqual(casing.camelback(''), '')

    def test_camelcase(self):
        self.assertEqual(casing.camelcase('mock-property-1'), 'MockProperty1')
        self.assertEqual(casing.camelcase('scientificName'), 'ScientificName')

    def test_dash(self):
        self.assertEqual(casing.dash('mockProperty1'), 'mock-property-1')
        self.assertEqual(casing.dash('scientific_name'), 'scientific-name')

    def test_underscore(self):
        self.assertEqual(casing.underscore('ScientificName'), 'scientific_name')
        self.assertEqual(casing.underscore('scientific-name'), 'scientific_name')

    def test_camelback_is_idempotent(self):
        for name in ['foo_b_ar', 'HTMLParser', 'a1B', 'point_x_y', 'x']:
            once = casing.camelback(name)
            self.assertEqual(casing.camelback(once), once, name)

    def test_spellings_agree(self):
        spellings = [
            'scientific_name', 'ScientificName', 'scientific-name',
            'scientificName', 'Scientific Name',
        ]
        self.assertEqual(
            {casing.camelback(s) for s in spellings}, {'scientificName'}
        )
        self.assertEqual(
            {casing.underscore(s) for s in spellings}, {'scientific_name'}
        )


NAMES = [
    'scientific_name', 'ScientificName', 'SCIENTIFIC_NAME', 'HTMLParser',
    'XMLHttpRequest', 'parseHTML', 'point_x_y', 'pointXY', 'a_b_c',
    'rgb_r_g_b', 'x_y_z', 'foo_b_ar', 'mock-property-1', 'a1B', '1_a', '2_3',
    'ID', 'userID2', 'x', 'X', '_', '',
]


@pytest.mark.parametrize('name', NAMES)
def test_camelback_twice_is_camelback_once(name):
    once = casing.camelback(name)
    assert casing.camelback(once) == once


@pytest.mark.parametrize('name', NAMES)
def test_camelback_keeps_the_underscore_form(name):
    once = casing.camelback(name)
    assert casing.underscore(once) == casing.underscore(casing.camelback(once))
