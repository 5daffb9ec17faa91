"""Random filename keys."""

import secrets

from cargo.core.config import get_settings

# letters and numbers except 0, 1, l, O, and vowels
KEY_ALPHABET = "bcdfghjkmnpqrstvwxyz23456789"


class KeyGenerator:
    """Generates the short random key appended to stored filenames.

    Keys are not checked for uniqueness; combined with the record id they only
    need to make filenames hard to guess.
    """

    def __init__(self, alphabet: str = KEY_ALPHABET):
        self.alphabet = alphabet

    def generate(self, length: int | None = None) -> str:
        if length is None:
            length = get_settings().key_length
        if length < 1:
            raise ValueError("Key length must be at least 1")
        return "".join(secrets.choice(self.alphabet) for _ in range(length))
