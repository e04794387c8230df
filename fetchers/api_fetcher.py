"""API fetcher implementation for retrieving posts from a Notion database."""

import logging
from typing import Any, Dict, List, Optional

from config_loader import get_nested
from models import NotionPage
from notion_api import NotionClient
from .base_fetcher import BaseFetcher, FetcherError

PUBLISHED_FILTER = {
    'property': 'published',
    'checkbox': {'equals': True},
}

DATE_ASCENDING = [
    {'property': 'date', 'direction': 'ascending'},
]


class ApiFetcher(BaseFetcher):
    """Fetches published posts and their block trees via the Notion API."""

    def __init__(
        self,
        config: Dict[str, Any],
        client: NotionClient,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API fetcher.

        Args:
            config: Configuration dictionary with notion settings
            client: Shared NotionClient used for every request of the run
            logger: Logger instance (optional)
        """
        super().__init__(config, logger or logging.getLogger('notion_jekyll_exporter.fetcher.api'))

        self.database_id = get_nested(config, 'notion.database_id')
        if not self.database_id:
            raise ValueError("notion.database_id is required for API fetcher")

        self.client = client

    def fetch_published_pages(self) -> List[NotionPage]:
        """
        Run the single filtered, sorted database query.

        Pages whose ``published`` checkbox is not set are dropped even if the
        API returns them. Remote order is preserved.
        """
        self.logger.info(f"Querying database {self.database_id} for published posts")
        results = self.client.query_database(
            self.database_id,
            filter=PUBLISHED_FILTER,
            sorts=DATE_ASCENDING
        )

        pages = []
        for result in results:
            if result.get('object', 'page') != 'page' or 'id' not in result:
                raise FetcherError(f"Unexpected object in query results: {result.get('object')!r}")

            page = NotionPage.from_api(result)
            if not page.published:
                self.logger.debug(f"Skipping unpublished page {page.id}")
                continue
            pages.append(page)

        return pages

    def fetch_blocks(self, block_id: str) -> List[Dict[str, Any]]:
        return self.client.list_block_children(block_id)
