"""
Season ranking for Tornelo chess tournaments.

Per-section standings are extracted from rendered page text and merged into
one combined ranking per player.
"""

from tornelo_ranking.aggregator import aggregate
from tornelo_ranking.entities import PlayerTotal, SectionRecord
from tornelo_ranking.extractor import extract

__all__ = [
    "aggregate",
    "extract",
    "PlayerTotal",
    "SectionRecord",
]
