"""Property name casing.

The store never cares how a caller spells a property: `scientific_name`,
`scientific-name`, `ScientificName` and `scientificName` are all the same
property. These functions split a name into lowercase words and join them
back together in one convention.

Inside a word every capital letter starts a new word, so `pointXY` is
`point x y`. Only an all-caps name (`SCIENTIFIC_NAME`) or a leading acronym
(`HTMLParser`) keeps a run of capitals together. With that rule
`camelback(camelback(name)) == camelback(name)` for every name.
"""
import re
from typing import List

_SEPARATORS = re.compile(r'[^a-zA-Z0-9]+')
# "SCIENTIFIC", "ID2"
_UPPER_WORD = re.compile(r'^[A-Z][A-Z0-9]*$')
# "HTMLParser" -> "HTML", "Parser"
_ACRONYM_PREFIX = re.compile(r'^[A-Z]+(?=[A-Z][a-z])')
_CAPITAL = re.compile(r'(?=[A-Z])')
# "property1" -> "property 1"
_LETTER_DIGIT = re.compile(r'([a-zA-Z])([0-9])')


def _chunk_words(chunk: str) -> List[str]:
    if _UPPER_WORD.match(chunk):
        parts = [chunk]
    else:
        parts = []
        match = _ACRONYM_PREFIX.match(chunk)
        if match is not None:
            parts.append(match.group(0))
            chunk = chunk[match.end():]
        parts.extend(_CAPITAL.split(chunk))
    words = []
    for part in parts:
        words.extend(_LETTER_DIGIT.sub(r'\1 \2', part).split())
    return words


def split(name: str) -> List[str]:
    """Split a name of any casing convention into a list of lowercase words.

    >>> split('scientific_name')
    ['scientific', 'name']
    >>> split('HTMLParser')
    ['html', 'parser']
    >>> split('pointXY')
    ['point', 'x', 'y']
    """
    words = []
    for chunk in _SEPARATORS.split(name):
        words.extend(word.lower() for word in _chunk_words(chunk))
    return words


def camelback(name: str) -> str:
    words = split(name)
    if not words:
        return ''
    return words[0] + ''.join(word.capitalize() for word in words[1:])


def camelcase(name: str) -> str:
    return ''.join(word.capitalize() for word in split(name))


def dash(name: str) -> str:
    return '-'.join(split(name))


def underscore(name: str) -> str:
    return '_'.join(split(name))
