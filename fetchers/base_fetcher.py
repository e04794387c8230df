"""Abstract base fetcher interface and common functionality."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from models import NotionPage


class FetcherError(Exception):
    """Base exception for fetcher-related errors."""
    pass


class BaseFetcher(ABC):
    """Abstract base class for post fetchers."""

    def __init__(self, config: Dict[str, Any], logger: Optional[logging.Logger] = None):
        """
        Initialize base fetcher with configuration and logger.

        Args:
            config: Configuration dictionary
            logger: Logger instance (optional, uses module logger if not provided)
        """
        self.config = config
        self.logger = logger or logging.getLogger('notion_jekyll_exporter.fetcher')

    @abstractmethod
    def fetch_published_pages(self) -> List[NotionPage]:
        """
        Fetch every published post, ascending by date.

        Returns:
            List of NotionPage objects in export order
        """
        pass

    @abstractmethod
    def fetch_blocks(self, block_id: str) -> List[Dict[str, Any]]:
        """
        Fetch the direct child blocks of a page or block.

        Args:
            block_id: Page or block ID

        Returns:
            Raw block dictionaries in document order
        """
        pass
