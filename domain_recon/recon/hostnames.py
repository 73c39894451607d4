"""
Hostname Classification Module

Splits raw certificate names into wildcard patterns and fully-qualified
names, and provides the syntactic validity check applied before a name is
handed to DNS.  Names are kept byte-for-byte as returned by the sources.
"""

import logging
import re
from typing import Iterable, Set, Tuple

logger = logging.getLogger(__name__)

WILDCARD_PREFIX = "*"

_DOMAIN_RE = re.compile(
    r"^(?:[a-zA-Z0-9_](?:[a-zA-Z0-9\-_]{0,61}[a-zA-Z0-9])?\.)*"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?\.?$"
)


def is_wildcard(name: str) -> bool:
    return name.startswith(WILDCARD_PREFIX)


def classify(names: Iterable[str]) -> Tuple[Set[str], Set[str]]:
    """
    Partition names into (wildcards, fqdns).

    Duplicates collapse and empty strings are skipped.

    Args:
        names: Raw hostnames from one or more certificates

    Returns:
        Tuple of (wildcard patterns, fully-qualified names)
    """
    wildcards: Set[str] = set()
    fqdns: Set[str] = set()

    for name in names:
        if not name:
            continue
        if is_wildcard(name):
            wildcards.add(name)
        else:
            fqdns.add(name)

    return wildcards, fqdns


def split_name_value(name_value: str) -> Iterable[str]:
    """Split a newline-delimited certificate name list"""
    return name_value.split("\n")


def is_valid_domain(name: str) -> bool:
    """
    Validate domain name syntax.

    Args:
        name: Domain name to validate

    Returns:
        True if the name can be submitted to a resolver, False otherwise
    """
    if not name or len(name) > 253:
        return False

    if not _DOMAIN_RE.match(name):
        return False

    labels = name.rstrip(".").split(".")
    for label in labels:
        if len(label) > 63 or len(label) == 0:
            return False

    return True
