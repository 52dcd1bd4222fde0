"""
Season aggregation of per-section standings.

Players are merged across sections by exact name. The season ranking orders
by total points, then by the best rating seen; anything still tied keeps the
order in which players were first encountered.
"""

import logging
from typing import Dict, List

from tornelo_ranking.entities import PlayerTotal, SectionResults

logger = logging.getLogger(__name__)


def total_players(section_results: SectionResults) -> int:
    """Number of section records over all sections (0 means no data at all)."""
    return sum(len(records) for records in section_results.values())


def aggregate(section_results: SectionResults) -> List[PlayerTotal]:
    """
    Combine per-section standings into one ranked season list.

    Args:
        section_results (SectionResults): Records per section id, sections in display order.

    Returns:
        List[PlayerTotal]: Players sorted best first, ranked 1..n without shared ranks.
    """
    totals: Dict[str, PlayerTotal] = {}

    for section_id, records in section_results.items():
        for record in records:
            player = totals.get(record.name)
            if player is None:
                player = PlayerTotal(name=record.name, rating=record.rating or 0)
                totals[record.name] = player

            player.total_points += record.points
            player.sections[section_id] = record.points
            if record.rating > player.rating:
                player.rating = record.rating

    # sorted() is stable, so full ties stay in first-seen order
    ranked = sorted(totals.values(), key=lambda p: (p.total_points, p.rating), reverse=True)
    for i, player in enumerate(ranked, 1):
        player.rank = i

    logger.debug(f"Aggregated {total_players(section_results)} records into {len(ranked)} players")
    return ranked
