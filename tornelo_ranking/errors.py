"""
Exceptions raised outside the parsing core.

The extractor and aggregator never raise for malformed page content; these
are for the layers around them (fetching, configuration, orchestration).
"""


class TorneloError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(TorneloError):
    """Invalid configuration file or option."""


class FetchError(TorneloError):
    """A standings page could not be retrieved."""

    def __init__(self, url: str, cause: Exception = None):
        self.url = url
        self.cause = cause
        message = f"Failed to fetch {url}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class NoDataError(TorneloError):
    """Every configured section produced zero standings records."""

    def __init__(self, section_ids):
        self.section_ids = list(section_ids)
        super().__init__(
            f"No data extracted from any section ({', '.join(self.section_ids) or 'none configured'})"
        )
