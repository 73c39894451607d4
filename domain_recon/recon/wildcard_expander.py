"""
Wildcard Expansion Module

Turns wildcard certificate names such as ``*.example.com`` into concrete
candidates by substituting each word of a wordlist for the first ``*``.
Candidates already known as fully-qualified names are left out, since the
first resolution pass has covered them.
"""

import logging
from typing import Iterable, Set

logger = logging.getLogger(__name__)


def load_words(path: str) -> Set[str]:
    """
    Read a newline-delimited wordlist.

    Tokens are trimmed; blank lines are skipped.

    Raises:
        OSError: If the file cannot be opened or read, or is not valid UTF-8.
    """
    words: Set[str] = set()
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                word = line.strip()
                if word:
                    words.add(word)
    except UnicodeDecodeError as e:
        raise OSError(f"{path}: not valid UTF-8 ({e.reason} at byte {e.start})") from e

    logger.info(f"Loaded {len(words)} words from {path}")
    return words


def expand(
    wildcards: Iterable[str],
    known_fqdns: Set[str],
    words: Iterable[str],
) -> Set[str]:
    """
    Expand wildcard patterns against a wordlist.

    The result grows as |wildcards| x |words|; no cap is applied.

    Args:
        wildcards: Wildcard patterns, e.g. ``*.example.com``
        known_fqdns: Names already resolved, excluded from the output
        words: Substitution words

    Returns:
        Set of candidate hostnames disjoint from ``known_fqdns``
    """
    patterns = list(wildcards)
    candidates: Set[str] = set()

    for word in words:
        for pattern in patterns:
            candidate = pattern.replace("*", word, 1)
            if candidate not in known_fqdns:
                candidates.add(candidate)

    logger.info(f"Expanded {len(patterns)} wildcard(s) into {len(candidates)} candidate names")
    return candidates
