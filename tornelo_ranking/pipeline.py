"""
Season standings pipeline.

This module provides:
- scrape_sections: fetch and extract every configured section
- load_section_texts: the same from previously saved page text (offline)
- build_standings: aggregate sections into a SeasonStandings result
- run: scrape + build with the configured fetcher and cache
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from tornelo_ranking.aggregator import aggregate, total_players
from tornelo_ranking.cache import CachingFetcher, PageCache
from tornelo_ranking.config import ScraperConfig, SectionConfig
from tornelo_ranking.entities import PlayerTotal, SectionResults
from tornelo_ranking.errors import FetchError, NoDataError
from tornelo_ranking.extractor import extract
from tornelo_ranking.fetcher import PageFetcher, create_fetcher
from tornelo_ranking.utils import debug_text_path

logger = logging.getLogger(__name__)


@dataclass
class SeasonStandings:
    """Combined season ranking, ready for rendering."""

    players: List[PlayerTotal]
    sections: List[SectionConfig]
    section_counts: Dict[str, int] = field(default_factory=dict)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def labels(self) -> Dict[str, str]:
        return {s.id: s.label for s in self.sections}


def scrape_sections(config: ScraperConfig, fetcher: PageFetcher) -> SectionResults:
    """
    Fetch and extract the standings of every configured section, in order.

    A section whose page cannot be fetched is logged and left empty so the
    remaining sections still count.

    Args:
        config: Run configuration (sections, URLs, debug directory).
        fetcher: Page fetcher used for every section.

    Returns:
        Records per section id.
    """
    results: SectionResults = {}

    for section in config.sections:
        url = config.section_url(section)
        logger.info(f"Fetching {section.id} from {url}")

        try:
            text = fetcher.fetch_text(url)
        except FetchError as e:
            logger.error(f"Failed to load {section.id}: {e}")
            results[section.id] = []
            continue

        if config.debug_dir:
            path = debug_text_path(config.debug_dir, section.id)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
            logger.debug(f"Saved page text of {section.id} to {path}")

        records = extract(text)
        if records:
            logger.info(f"Extracted {len(records)} players from {section.id}")
        else:
            logger.warning(f"No standings found for {section.id}")
        results[section.id] = records

    return results


def load_section_texts(directory: str, sections: List[SectionConfig]) -> SectionResults:
    """
    Extract standings from page text saved by an earlier run.

    Missing files yield empty sections.
    """
    results: SectionResults = {}
    for section in sections:
        path = debug_text_path(directory, section.id)
        if not path.is_file():
            logger.warning(f"No saved page text for {section.id} at {path}")
            results[section.id] = []
            continue
        results[section.id] = extract(path.read_text(encoding="utf-8"))
        logger.info(f"Extracted {len(results[section.id])} players from {path}")
    return results


def build_standings(section_results: SectionResults,
                    sections: List[SectionConfig],
                    updated_at: Optional[datetime] = None) -> SeasonStandings:
    """
    Aggregate section results into the season ranking.

    Raises:
        NoDataError: When no section produced a single record.
    """
    if total_players(section_results) == 0:
        raise NoDataError([s.id for s in sections])

    players = aggregate(section_results)
    logger.info(f"Combined {len(players)} unique players over {len(section_results)} sections")

    return SeasonStandings(
        players=players,
        sections=list(sections),
        section_counts={sid: len(records) for sid, records in section_results.items()},
        updated_at=updated_at or datetime.now(),
    )


def run(config: ScraperConfig, fetcher: Optional[PageFetcher] = None) -> SeasonStandings:
    """
    Scrape every section and build the season standings.

    Without an explicit fetcher the configured one is created, wrapped in the
    page cache, and closed afterwards.
    """
    if fetcher is not None:
        return build_standings(scrape_sections(config, fetcher), config.sections)

    cache = PageCache(config.cache_dir, config.cache_minutes)
    with CachingFetcher(create_fetcher(config), cache) as cached:
        section_results = scrape_sections(config, cached)
    return build_standings(section_results, config.sections)
