import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from tornelo_ranking.errors import ConfigError

LOG_FILE = "data/logs/tornelo.log"
LOG_LEVEL = "INFO"    # Options: DEBUG, INFO, WARNING, ERROR, CRITICAL

DEFAULT_BASE_URL = "https://tornelo.com/chess/orgs/trio/events/intern-2025-2026"
DEFAULT_SECTION_IDS = ["blok-1", "blok-2", "blok-3"]
DEFAULT_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"


def section_label(section_id: str) -> str:
    """Human-readable label for a section id, e.g. 'blok-2' -> 'Blok 2'."""
    return section_id.replace("blok-", "Blok ")


@dataclass
class SectionConfig:
    """
    One tournament section whose standings are published on its own page.

    Attributes:
        id: Stable identifier used in the standings URL and as merge key for section scores.
        label: Display name for tables and widget JSON. Derived from the id when empty.
    """
    id: str
    label: str = ""

    def __post_init__(self):
        if not self.label:
            self.label = section_label(self.id)


@dataclass
class ScraperConfig:
    """
    Configuration for a full scrape-and-publish run.

    Attributes:
        base_url: Event URL; section pages live under `/standings/section/<id>`.
        sections: Ordered sections to aggregate. Order determines table columns.
        timeout: Page load timeout in seconds.
        headless: Run the browser without a window (browser fetcher only).
        fetcher: Name of the page fetcher ('http' or 'browser').
        render_wait: Seconds to let client-side scripts render before reading the page.
        cache_dir: Directory for cached page text.
        cache_minutes: Cached pages younger than this are reused. 0 disables the cache.
        output_dir: Where standings.html / standings.json / tornelo-data.json are written.
        debug_dir: If set, the raw text of every section page is saved here.
        user_agent: User-Agent header sent with every request.
    """
    base_url: str = DEFAULT_BASE_URL
    sections: List[SectionConfig] = field(
        default_factory=lambda: [SectionConfig(s) for s in DEFAULT_SECTION_IDS]
    )
    timeout: float = 30.0
    headless: bool = True
    fetcher: str = "browser"
    render_wait: float = 5.0
    cache_dir: str = "data/cache"
    cache_minutes: int = 30
    output_dir: str = "output"
    debug_dir: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT

    def section_url(self, section: SectionConfig) -> str:
        return f"{self.base_url.rstrip('/')}/standings/section/{section.id}"

    @property
    def section_ids(self) -> List[str]:
        return [s.id for s in self.sections]


# Expected JSON types of the scalar fields
_FIELD_TYPES = {
    "base_url": (str,),
    "timeout": (int, float),
    "headless": (bool,),
    "fetcher": (str,),
    "render_wait": (int, float),
    "cache_dir": (str,),
    "cache_minutes": (int,),
    "output_dir": (str,),
    "debug_dir": (str, type(None)),
    "user_agent": (str,),
}


def _parse_sections(raw: Any) -> List[SectionConfig]:
    if not isinstance(raw, list) or not raw:
        raise ConfigError("'sections' must be a non-empty list")
    sections = []
    for item in raw:
        # Either "blok-1" or {"id": "blok-1", "label": "Blok 1"}
        if isinstance(item, str) and item:
            sections.append(SectionConfig(item))
        elif (isinstance(item, dict) and isinstance(item.get("id"), str) and item["id"]
              and isinstance(item.get("label", ""), str)):
            sections.append(SectionConfig(item["id"], item.get("label", "")))
        else:
            raise ConfigError(f"Invalid section entry: {item!r}")

    # Ids key the section points, labels key them in the widget JSON
    for attr in ("id", "label"):
        values = [getattr(s, attr) for s in sections]
        duplicates = sorted({v for v in values if values.count(v) > 1})
        if duplicates:
            raise ConfigError(f"Duplicate section {attr}s: {', '.join(duplicates)}")
    return sections


def _check_field_types(data: Dict[str, Any]):
    for name, types in _FIELD_TYPES.items():
        if name not in data:
            continue
        value = data[name]
        # bool is an int subclass, only accept it where a bool is expected
        if isinstance(value, bool) and bool not in types:
            valid = False
        else:
            valid = isinstance(value, types)
        if not valid:
            expected = " or ".join("null" if t is type(None) else t.__name__ for t in types)
            raise ConfigError(f"'{name}' must be {expected}, got {value!r}")
        if types != (bool,) and isinstance(value, (int, float)) and value < 0:
            raise ConfigError(f"'{name}' must not be negative, got {value!r}")


def config_from_dict(data: Dict[str, Any]) -> ScraperConfig:
    """
    Build a ScraperConfig from a plain dict, keeping defaults for missing keys.

    Raises:
        ConfigError: On unknown keys, values of the wrong type or a malformed section list.
    """
    known = {f.name for f in fields(ScraperConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    _check_field_types(data)
    kwargs = dict(data)
    if "sections" in kwargs:
        kwargs["sections"] = _parse_sections(kwargs["sections"])
    return ScraperConfig(**kwargs)


def load_config(path: Optional[str] = None) -> ScraperConfig:
    """
    Load configuration from a JSON file. Without a path the defaults are used.
    """
    if path is None:
        return ScraperConfig()

    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return config_from_dict(data)
