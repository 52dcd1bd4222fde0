"""
Standings extraction from rendered page text.

Tornelo renders its standings as a plain list driven by client-side scripts,
so there is no table markup to walk. What remains is the visible text, one
token per line, roughly:

    Rank, (Flag), Player, Rtg, Gender, Score, Perf, +/-, Trophy

The parser below is positional: a digit-only line starts a candidate, the name,
rating and score are searched for in small windows after it. Every step fails
open. A candidate that cannot be completed is dropped and scanning continues.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from tornelo_ranking.entities import SectionRecord

logger = logging.getLogger(__name__)

HALF_POINT = "½"
GENDER_TOKENS = ("Male", "Female")

NAME_WINDOW = 4
SCORE_WINDOW = 9
MAX_POINTS = 15.0
MAX_RANK_DIGITS = 4300

_BLOCK_MARKER_RE = re.compile(r"[0-9]+/[0-9]+")
_RANK_RE = re.compile(r"[0-9]+")
_NUMERIC_PUNCT_RE = re.compile(r"[0-9.,]+")
_ARROW_RE = re.compile(r"[↑↓]")  # rating change indicators
_LETTER_RE = re.compile(r"[a-zA-Z]")
_RATING_RE = re.compile(r"[0-9]{3,4}")
_SCORE_RE = re.compile(r"½|[0-9]+(?:[.,][0-9]+|½)?")


def split_lines(page_text: str) -> List[str]:
    """Split page text into trimmed, non-empty lines, keeping their order."""
    return [line.strip() for line in page_text.split("\n") if line.strip()]


def find_block_start(lines: List[str]) -> int:
    """
    Index of the first line of the standings block.

    The block starts right after the first line mentioning "items" or holding a
    round-progress fraction such as "5/7". Without such a line the whole page
    is scanned.
    """
    for i, line in enumerate(lines):
        if "items" in line or _BLOCK_MARKER_RE.search(line):
            return i + 1
    return 0


def is_name_candidate(line: str) -> bool:
    return (
        line not in GENDER_TOKENS
        and len(line) > 2
        and not _RANK_RE.fullmatch(line)
        and not _NUMERIC_PUNCT_RE.fullmatch(line)
        and not _ARROW_RE.match(line)
        and not line.startswith("extern")
        and _LETTER_RE.search(line) is not None
    )


def parse_score(token: str) -> Optional[float]:
    """
    Parse a score token such as "3", "3.5", "3,5", "3½" or "½".

    Returns None for anything that is not a score or falls outside 0-15.
    """
    if not _SCORE_RE.fullmatch(token):
        return None
    value = float(token.replace(",", ".").replace(HALF_POINT, ".5"))
    if 0 <= value <= MAX_POINTS:
        return value
    return None


def _find_name(lines: List[str], rank_index: int) -> Optional[int]:
    end = min(rank_index + 1 + NAME_WINDOW, len(lines))
    for j in range(rank_index + 1, end):
        if is_name_candidate(lines[j]):
            return j
    return None


def _find_rating_and_points(lines: List[str], name_index: int) -> Optional[Tuple[int, float]]:
    rating = 0
    found_rating = False

    end = min(name_index + 1 + SCORE_WINDOW, len(lines))
    for j in range(name_index + 1, end):
        candidate = lines[j]
        if candidate in GENDER_TOKENS:
            continue

        if not found_rating and _RATING_RE.fullmatch(candidate):
            rating = int(candidate)
            found_rating = True
            continue

        if found_rating:
            points = parse_score(candidate)
            if points is not None:
                return rating, points

    return None


def parse_candidate(lines: List[str], index: int) -> Optional[SectionRecord]:
    """
    Try to build a record from the rank marker at `lines[index]`.

    Returns None when the line is not a rank marker, or when no name or no
    valid score can be found in the scan windows after it.
    """
    if not _RANK_RE.fullmatch(lines[index]):
        return None

    name_index = _find_name(lines, index)
    if name_index is None:
        return None

    found = _find_rating_and_points(lines, name_index)
    if found is None:
        return None

    # int() refuses longer digit strings on Python 3.11+
    if len(lines[index]) > MAX_RANK_DIGITS:
        return None

    rating, points = found
    return SectionRecord(
        rank=int(lines[index]),
        name=lines[name_index],
        rating=rating,
        points=points,
    )


def deduplicate_by_name(records: Iterable[SectionRecord]) -> List[SectionRecord]:
    """Keep the first record for every name, preserving order."""
    seen = set()
    unique = []
    for record in records:
        if record.name in seen:
            continue
        seen.add(record.name)
        unique.append(record)
    return unique


def extract(page_text: str) -> List[SectionRecord]:
    """
    Extract one section's standings from the visible text of its results page.

    Args:
        page_text (str): Full rendered page text, lines separated by newlines.

    Returns:
        List[SectionRecord]: Records in discovery order, unique by name. Empty when
                             nothing recognisable is found; never raises.
    """
    lines = split_lines(page_text)
    start = find_block_start(lines)

    records = []
    discarded = 0
    for i in range(start, len(lines)):
        if not _RANK_RE.fullmatch(lines[i]):
            continue
        record = parse_candidate(lines, i)
        if record is None:
            discarded += 1
            continue
        records.append(record)

    unique = deduplicate_by_name(records)
    logger.debug(
        f"Standings block starts at line {start} of {len(lines)}: "
        f"{len(records)} candidates parsed, {discarded} discarded, {len(unique)} unique players"
    )
    return unique
