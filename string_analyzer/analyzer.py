from collections import Counter
from hashlib import sha256

from string_analyzer.models import StringProperties


def compute_hash(value: str) -> str:
    """SHA-256 of the raw UTF-8 bytes, lowercase hex."""
    return sha256(value.encode("utf-8")).hexdigest()


def _is_palindrome(value: str) -> bool:
    # Case-insensitive, letters and digits only
    skeleton = [c for c in value.lower() if c.isalnum()]
    i, j = 0, len(skeleton) - 1
    while i < j:
        if skeleton[i] != skeleton[j]:
            return False
        i += 1
        j -= 1
    return True


def _count_words(value: str) -> int:
    return len(value.split())


def analyze(value: str) -> StringProperties:
    """Compute every derived property of ``value``.

    Unique characters and the frequency map use the raw, case-sensitive
    code points; only the palindrome check normalizes the text.
    """
    freq = Counter(value)
    return StringProperties(
        length=len(value),
        is_palindrome=_is_palindrome(value),
        unique_characters=len(freq),
        word_count=_count_words(value),
        sha256_hash=compute_hash(value),
        character_frequency_map=dict(freq),
    )
