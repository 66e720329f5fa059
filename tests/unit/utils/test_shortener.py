"""Unit tests for the shortcode generator in shortener.py.

Test coverage includes:

1. Basic functionality
   - Ensures generated codes have the configured length.
   - Ensures all characters belong to the configured (URL-safe) alphabet.

2. Randomness source
   - Ensures an injected RNG makes generation reproducible.
   - Ensures codes are not sequential or repeated across many draws.

3. Error handling
   - Ensures invalid lengths and alphabets raise appropriate exceptions.
"""

import random
import string

import pytest

from linkvault.utils import ShortcodeGenerator, generate_shortcode
from linkvault.utils.shortener import ALPHABET, BASE


# -------------------------------
# 1. Basic functionality
# -------------------------------


def test_alphabet_is_base62():
    assert BASE == 62
    assert set(ALPHABET) == set(string.ascii_letters + string.digits)


@pytest.mark.parametrize('length', [1, 5, 7, 12])
def test_generate_has_fixed_length(length):
    shortcode = ShortcodeGenerator(length=length).generate()
    assert isinstance(shortcode, str)
    assert len(shortcode) == length
    assert set(shortcode) <= set(ALPHABET)


def test_generate_shortcode_default_length():
    assert len(generate_shortcode()) == 7


def test_custom_alphabet():
    generator = ShortcodeGenerator(length=32, alphabet='ab-_')
    assert set(generator.generate()) <= {'a', 'b', '-', '_'}


def test_space_size():
    assert ShortcodeGenerator(length=7).space_size == 62**7
    assert ShortcodeGenerator(length=3, alphabet='aab').space_size == 2**3


# -------------------------------
# 2. Randomness source
# -------------------------------


def test_generate_with_seeded_rng_is_reproducible():
    first = ShortcodeGenerator(rng=random.Random(42))
    second = ShortcodeGenerator(rng=random.Random(42))

    assert [first.generate() for _ in range(10)] == [second.generate() for _ in range(10)]


def test_generate_produces_distinct_codes():
    generator = ShortcodeGenerator()
    codes = {generator.generate() for _ in range(10_000)}
    assert len(codes) == 10_000


# -------------------------------
# 3. Error handling
# -------------------------------


@pytest.mark.parametrize('length', ['7', 7.0, None, True])
def test_invalid_length_type(length):
    with pytest.raises(TypeError):
        ShortcodeGenerator(length=length)


@pytest.mark.parametrize('length', [0, -1])
def test_invalid_length_value(length):
    with pytest.raises(ValueError, match='Length must be a positive integer'):
        ShortcodeGenerator(length=length)


@pytest.mark.parametrize(
    'alphabet, message',
    [
        ('', 'at least two distinct characters'),
        ('aaaa', 'at least two distinct characters'),
        ('abc/', 'URL-safe'),
        ('ab c', 'URL-safe'),
    ],
)
def test_invalid_alphabet(alphabet, message):
    with pytest.raises(ValueError, match=message):
        ShortcodeGenerator(alphabet=alphabet)
