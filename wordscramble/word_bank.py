"""
Word bank for Word Scramble.
Holds the accepted words and enforces the format and uniqueness rules.
"""

import re
import logging
from typing import Iterable, List, Set

logger = logging.getLogger(__name__)

DEFAULT_WORDS: List[str] = ["puzzle", "challenge", "example", "solution"]

MIN_WORD_LENGTH = 2
MAX_WORD_LENGTH = 20

_WORD_PATTERN = re.compile(r'[A-Za-z]+')


def is_valid_word(word: str) -> bool:
    """Check that a word is purely alphabetic and within the allowed length."""
    if not word:
        return False
    if len(word) < MIN_WORD_LENGTH or len(word) > MAX_WORD_LENGTH:
        return False
    return bool(_WORD_PATTERN.fullmatch(word))


class WordBank:
    def __init__(self, initial_words: Iterable[str] = DEFAULT_WORDS):
        self._words: List[str] = []
        self._keys: Set[str] = set()
        for word in initial_words:
            self.add(word)

    def add(self, word: str) -> bool:
        """
        Add a word to the bank.

        Returns:
            True if the word was accepted, False if it was rejected
        """
        trimmed = (word or '').strip()
        if not is_valid_word(trimmed):
            logger.debug(f"Rejected word '{trimmed}': invalid format")
            return False
        key = trimmed.lower()
        if key in self._keys:
            logger.debug(f"Rejected word '{trimmed}': duplicate")
            return False
        self._words.append(trimmed)
        self._keys.add(key)
        return True

    @property
    def words(self) -> List[str]:
        return list(self._words)

    @property
    def keys(self) -> Set[str]:
        return set(self._keys)

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: str) -> bool:
        return (word or '').strip().lower() in self._keys
