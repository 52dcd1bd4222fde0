"""
Pytest configuration and shared fixtures for the season standings tests.
"""
from datetime import datetime
from typing import Dict

import pytest

from tornelo_ranking.config import ScraperConfig, SectionConfig
from tornelo_ranking.entities import SectionRecord
from tornelo_ranking.fetcher import PageFetcher
from tornelo_ranking.errors import FetchError


BLOK_1_TEXT = """
Tornelo
Sign in
Intern 2025-2026
Blok 1
Standings
Round 5/5
Rank
Player
Rtg
Gender
Score
1
Jan Peeters
1850
Male
4.5
↑12
2
Anna Smit
1700
Female
3,5
↓3
3
extern
Piet Janssens
1600
Male
3½
↑1
4
Karel De Smet
1450
Male
½
↓8
Powered by Tornelo
"""

BLOK_2_TEXT = """
Tornelo
Blok 2
Round 3/5
1
Anna Smit
1710
Female
2.5
↑10
2
Jan Peeters
1845
Male
2½
↓5
3
Eva Maes
1520
Female
1½
"""


class FakeFetcher(PageFetcher):
    """Serves page text from a dict; URLs not in the dict fail like a network error."""

    def __init__(self, pages: Dict[str, str]):
        self.pages = pages
        self.requested = []
        self.closed = False

    def fetch_text(self, url: str) -> str:
        self.requested.append(url)
        if url not in self.pages:
            raise FetchError(url, ConnectionError("unreachable"))
        return self.pages[url]

    def close(self):
        self.closed = True


@pytest.fixture
def blok1_text() -> str:
    return BLOK_1_TEXT


@pytest.fixture
def blok2_text() -> str:
    return BLOK_2_TEXT


@pytest.fixture
def sections():
    return [SectionConfig("blok-1"), SectionConfig("blok-2")]


@pytest.fixture
def config(tmp_path, sections) -> ScraperConfig:
    """Configuration with every directory inside the test's temp dir."""
    return ScraperConfig(
        base_url="https://tornelo.com/chess/orgs/trio/events/test-event",
        sections=sections,
        fetcher="http",
        cache_dir=str(tmp_path / "cache"),
        output_dir=str(tmp_path / "output"),
    )


@pytest.fixture
def fake_fetcher(config, blok1_text, blok2_text) -> FakeFetcher:
    return FakeFetcher({
        config.section_url(config.sections[0]): blok1_text,
        config.section_url(config.sections[1]): blok2_text,
    })


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2026, 10, 19, 14, 30)


def record(name: str, points: float, rating: int = 1500, rank: int = 1) -> SectionRecord:
    return SectionRecord(rank=rank, name=name, rating=rating, points=points)
