# Scrape Exceptions module
from .scrape_exceptions import ScrapeError, MediaAttributeMissingError

__all__ = ['ScrapeError', 'MediaAttributeMissingError']
