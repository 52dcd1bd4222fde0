"""
Page fetchers returning the visible text of a standings page.

The parsing core only needs a string of page text. Two ways of getting it:

- HttpFetcher: plain HTTP GET, HTML converted to text with BeautifulSoup.
  Fast, but only sees what the server renders.
- BrowserFetcher: headless Chrome through Selenium, reads the rendered body
  text after client-side scripts have run. Needed for Tornelo, whose
  standings are built in the browser.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait
from urllib3.util.retry import Retry
from webdriver_manager.chrome import ChromeDriverManager

from tornelo_ranking.config import ScraperConfig
from tornelo_ranking.errors import ConfigError, FetchError

logger = logging.getLogger(__name__)


class PageFetcher(ABC):
    """
    Abstract base class for anything that turns a URL into page text.
    """

    @abstractmethod
    def fetch_text(self, url: str) -> str:
        """
        Retrieve the visible text of a page.

        Args:
            url (str): Page to fetch.

        Returns:
            str: Page text, one rendered line per text line.

        Raises:
            FetchError: When the page cannot be retrieved.
        """
        pass

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def html_to_text(html: str) -> str:
    """Visible text of an HTML document, block elements on separate lines."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    return soup.get_text("\n")


class HttpFetcher(PageFetcher):
    """Fetch pages over HTTP with retries on transient server errors."""

    def __init__(self, user_agent: str, timeout: float = 30.0, retries: int = 3):
        self.timeout = timeout
        self.session = requests.Session()
        retry_strategy = Retry(
            total=retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "nl,en;q=0.9",
        })

    def fetch_text(self, url: str) -> str:
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(url, e) from e

        logger.info(f"Received {len(response.text)} bytes of HTML from {url}")
        return html_to_text(response.text)

    def close(self):
        self.session.close()


class BrowserFetcher(PageFetcher):
    """
    Fetch pages with headless Chrome and return the rendered body text.

    The driver is started lazily on the first fetch and reused for all
    sections of a run.
    """

    def __init__(self, user_agent: str, timeout: float = 30.0,
                 render_wait: float = 5.0, headless: bool = True):
        self.user_agent = user_agent
        self.timeout = timeout
        self.render_wait = render_wait
        self.headless = headless
        self._driver = None

    def _setup_driver(self):
        chrome_options = Options()
        if self.headless:
            chrome_options.add_argument("--headless=new")
        chrome_options.add_argument("--no-sandbox")
        chrome_options.add_argument("--disable-setuid-sandbox")
        chrome_options.add_argument("--disable-gpu")
        chrome_options.add_argument("--window-size=1920,1080")
        chrome_options.add_argument(f"user-agent={self.user_agent}")

        service = Service(ChromeDriverManager().install())
        driver = webdriver.Chrome(service=service, options=chrome_options)
        driver.set_page_load_timeout(self.timeout)
        logger.info("WebDriver initialized")
        return driver

    def fetch_text(self, url: str) -> str:
        if self._driver is None:
            try:
                self._driver = self._setup_driver()
            except (WebDriverException, requests.RequestException, OSError, ValueError) as e:
                # Driver download or Chrome start-up failed
                raise FetchError(url, e) from e
        try:
            self._driver.get(url)
            body = WebDriverWait(self._driver, self.timeout).until(
                EC.presence_of_element_located((By.TAG_NAME, "body"))
            )
            # Standings are rendered client-side after load
            logger.info(f"Waiting {self.render_wait:.0f}s for page scripts to render {url}")
            time.sleep(self.render_wait)
            return body.text
        except WebDriverException as e:
            raise FetchError(url, e) from e

    def close(self):
        if self._driver is not None:
            self._driver.quit()
            self._driver = None
            logger.info("WebDriver closed")


FetcherFactory = Callable[[ScraperConfig], PageFetcher]


FETCHERS: Dict[str, FetcherFactory] = {
    "http": lambda cfg: HttpFetcher(cfg.user_agent, timeout=cfg.timeout),
    "browser": lambda cfg: BrowserFetcher(
        cfg.user_agent,
        timeout=cfg.timeout,
        render_wait=cfg.render_wait,
        headless=cfg.headless,
    ),
}


def create_fetcher(config: ScraperConfig) -> PageFetcher:
    """Instantiate the fetcher named in the configuration."""
    factory = FETCHERS.get(config.fetcher)
    if factory is None:
        raise ConfigError(
            f"Unknown fetcher: {config.fetcher} (choose from {', '.join(sorted(FETCHERS))})"
        )
    return factory(config)
