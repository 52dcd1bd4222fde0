from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class SectionRecord:
    """
    One player's line in a single section's standings.

    Attributes:
        rank (int): Position printed on the standings page.
        name (str): Player name exactly as rendered (no normalization).
        rating (int): Rating shown next to the name, 0 when unknown.
        points (float): Score in this section, between 0 and 15.
    """
    rank: int
    name: str
    rating: int
    points: float


@dataclass
class PlayerTotal:
    """
    A player's combined season result across all sections.

    Attributes:
        name (str): Merge key, compared by exact string equality.
        rating (int): Highest rating seen in any section.
        total_points (float): Sum of points over the sections played.
        sections (Dict[str, float]): Points per section id; missing key = not played.
        rank (int): 1-based position in the season ranking (0 until ranked).
    """
    name: str
    rating: int = 0
    total_points: float = 0.0
    sections: Dict[str, float] = field(default_factory=dict)
    rank: int = 0

    def to_dict(self) -> Dict:
        return {
            "rank": self.rank,
            "name": self.name,
            "rating": self.rating,
            "total_points": self.total_points,
            "sections": dict(self.sections),
        }


# Section id -> records, in configured section order
SectionResults = Dict[str, List[SectionRecord]]
