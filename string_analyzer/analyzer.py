from hashlib import sha256
from typing import Dict

from string_analyzer.schemas import StringProperties


def fingerprint(value: str) -> str:
    """SHA-256 hex digest of the UTF-8 bytes of ``value``; used as the record id."""
    return sha256(value.encode("utf-8")).hexdigest()


def is_palindrome(value: str) -> bool:
    """Case-insensitive, whitespace-insensitive palindrome check."""
    cleaned = "".join(value.lower().split())
    return cleaned == cleaned[::-1]


def count_words(value: str) -> int:
    return len(value.split())


def character_frequency(value: str) -> Dict[str, int]:
    freq: Dict[str, int] = {}
    for c in value:
        freq[c] = freq.get(c, 0) + 1
    return freq


def compute_properties(value: str) -> StringProperties:
    """Derive every stored property of ``value``.

    Total over all strings (the empty string included) and free of side effects,
    so calling it twice on the same value gives identical results.
    """
    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=len(set(value)),
        word_count=count_words(value),
        sha256_hash=fingerprint(value),
        character_frequency_map=character_frequency(value),
    )
