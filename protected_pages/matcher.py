"""
Path matching for protected pages.

A record path is a shell-style glob: ``*`` matches any run of characters
(slashes included), ``?`` a single character, ``[...]`` a character class.
Both sides are lowercased and compared with ``fnmatchcase`` so the result
does not depend on the platform's case rules.
"""
import logging
import re
from dataclasses import dataclass
from fnmatch import translate
from functools import lru_cache
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass(frozen=True)
class ProtectedPathRecord:
    id: int
    path: str


def normalize_path(path: str) -> str:
    """Leading slash present, no trailing slash (root stays "/")."""
    path = (path or "").strip()
    if not path.startswith("/"):
        path = "/" + path
    return path.rstrip("/") or "/"


def strip_wildcard(path: str) -> str:
    return path.replace(WILDCARD, "")


@lru_cache(maxsize=512)
def _compile(pattern: str):
    return re.compile(translate(pattern))


def glob_match(pattern: str, candidate: str) -> bool:
    # callers pass both sides lowercased
    return _compile(pattern).match(candidate) is not None


def find_match(candidate_path: str, records: Iterable[ProtectedPathRecord]) -> Optional[ProtectedPathRecord]:
    """
    Return the first record guarding ``candidate_path``, or None.

    A record matches when its path globs the candidate, or when it is exactly
    ``candidate + "/*"`` (a "/foo/*" record guards "/foo" itself too).
    Records are tried in the order given.
    """
    candidate = candidate_path.lower()
    implicit = f"{candidate}/*"
    for record in records:
        pattern = record.path.lower()
        try:
            if glob_match(pattern, candidate):
                return record
        except re.error as e:
            # translate escapes glob syntax it cannot parse; a regex the engine rejects still skips only this record
            logger.warning(f"Skipping protected page {record.id}: bad pattern {record.path!r} ({e})")
            continue
        if pattern == implicit:
            return record
    return None
