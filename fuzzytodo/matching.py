"""
Fuzzy subsequence matching for todo items.

Two phases:
- quick_match(): compares a pattern against a positional bitmask signature
  aggregated over all words of an item. Cheap, may accept false positives,
  never rejects a true match.
- is_subsequence(): authoritative per-word check, only run when the
  pre-filter passes.

Only letters (case-insensitive) and '-' are significant characters.
"""

from typing import Iterable, Sequence

# Slot returned for characters outside [a-zA-Z-]. All such characters
# compare equal to each other in the deterministic path.
UNDEFINED_SLOT = 127

HYPHEN_SLOT = 28

Signature = tuple[int, ...]


def alphabet_slot(c: str) -> int:
    """Alphabet position of a character: 0-25 for letters, 28 for '-'."""
    if "a" <= c <= "z":
        return ord(c) - ord("a")
    if "A" <= c <= "Z":
        return ord(c) - ord("A")
    if c == "-":
        return HYPHEN_SLOT
    return UNDEFINED_SLOT


def class_bit(c: str) -> int:
    """Single-bit class mask of a character, 0 if it is not significant."""
    slot = alphabet_slot(c)
    if slot == UNDEFINED_SLOT:
        return 0
    return 1 << slot


def build_signature(words: Iterable[str]) -> Signature:
    """
    Build the positional signature of a word list.

    Position i holds the OR of the class bits of the i-th character of
    every word long enough to have one. The result is as long as the
    longest word.
    """
    masks: list[int] = []
    for word in words:
        for i, c in enumerate(word):
            if i >= len(masks):
                masks.append(class_bit(c))
            else:
                masks[i] |= class_bit(c)
    return tuple(masks)


def quick_match(pattern: str, signature: Sequence[int]) -> bool:
    """Can pattern be a subsequence of some word summarized by signature?"""
    i = 0
    m = len(signature)
    for c in pattern:
        bit = class_bit(c)
        while i < m and not (signature[i] & bit):
            i += 1
        if i >= m:
            return False
        i += 1
    return True


def is_subsequence(pattern: str, text: str) -> bool:
    """Case-insensitive check that pattern occurs in text in order."""
    i = 0
    m = len(text)
    for c in pattern:
        slot = alphabet_slot(c)
        while i < m and alphabet_slot(text[i]) != slot:
            i += 1
        if i >= m:
            return False
        i += 1
    return True


def matches_any_word(pattern: str, words: Iterable[str]) -> bool:
    return any(is_subsequence(pattern, w) for w in words)


def match_all(
    patterns: Iterable[str],
    signature: Sequence[int],
    words: Sequence[str],
) -> bool:
    """
    True if every pattern matches at least one of words.

    The signature pre-filter runs first; the deterministic scan only
    confirms patterns that survive it. An empty pattern list matches.
    """
    return all(
        quick_match(p, signature) and matches_any_word(p, words)
        for p in patterns
    )
