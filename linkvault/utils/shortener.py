"""Shortcode generation utility

This module provides a generator of short, fixed-length, URL-safe codes drawn
from a random source. Codes carry no information about call order, so they
can't be enumerated by guessing neighbours of a known code.

The generator does NOT guarantee uniqueness. Collisions are detected by the
durable store's conditional write and resolved by retrying with a fresh code.

Classes:
    ShortcodeGenerator(length=7, alphabet=BASE62, rng=None):
        Reusable generator with an injectable random source.

Functions:
    generate_shortcode(length=7) -> str:
        Generate a single code from the system's CSPRNG.

Example:
    >>> from linkvault.utils import ShortcodeGenerator
    >>> generator = ShortcodeGenerator(length=7)
    >>> generator.generate()
    'q3ZbT0x'
"""

import random
import string

from linkvault.constants import Defaults


ALPHABET = Defaults.SHORTCODE_ALPHABET
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits
URL_SAFE_CHARACTERS = frozenset(string.ascii_letters + string.digits + '-_')


class ShortcodeGenerator:
    """Generate random fixed-length shortcodes

    Attributes:
        length (int):
            Number of characters in every generated code.
        alphabet (str):
            Characters codes are drawn from. Must be URL-safe.
        rng (random.Random):
            Random source. Defaults to random.SystemRandom (OS CSPRNG).

    Example:
        >>> len(ShortcodeGenerator(length=5, rng=random.Random(42)).generate())
        5
    """

    def __init__(self, length: int = Defaults.SHORTCODE_LENGTH, alphabet: str = ALPHABET, rng: random.Random | None = None):
        if not isinstance(length, int) or isinstance(length, bool):
            raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
        if length < 1:
            raise ValueError(f'Length must be a positive integer (given value: {length}).')
        if len(set(alphabet)) < 2:
            raise ValueError(f'Alphabet must contain at least two distinct characters (given value: {alphabet!r}).')
        if not set(alphabet) <= URL_SAFE_CHARACTERS:
            raise ValueError(f'Alphabet must only contain URL-safe characters (given value: {alphabet!r}).')

        self.length = length
        self.alphabet = alphabet
        self.rng = rng if rng is not None else random.SystemRandom()

    @property
    def space_size(self) -> int:
        """Number of distinct codes this generator can produce"""
        return len(set(self.alphabet)) ** self.length

    def generate(self) -> str:
        """Return a fresh random shortcode of `self.length` characters"""
        return ''.join(self.rng.choice(self.alphabet) for _ in range(self.length))


def generate_shortcode(length: int = Defaults.SHORTCODE_LENGTH) -> str:
    """Generate a random Base62 shortcode of the given length.

    Args:
        length (int, optional):
            Number of characters. Defaults to 7.

    Returns:
        str: A random alphanumeric shortcode.

    Example:
        >>> generate_shortcode(7)
        'Gh71WPT'
    """
    return ShortcodeGenerator(length=length).generate()
