"""Notion REST API client with authentication, transport retries and pagination."""

import json
import logging
import time
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger('notion_jekyll_exporter.client')


class NotionClient:
    """Thin Notion REST API client used for database queries and block listing."""

    def __init__(
        self,
        api_token: str,
        base_url: str = 'https://api.notion.com/v1',
        api_version: str = '2022-06-28',
        timeout: float = 30,
        max_retries: int = 3,
        retry_backoff_factor: float = 2.0,
        rate_limit: float = 0.0,
        page_size: int = 100
    ):
        """
        Initialize Notion client with bearer authentication and retry configuration.

        Args:
            api_token: Notion integration token
            base_url: Notion API base URL
            api_version: Value sent in the Notion-Version header
            timeout: HTTP request timeout in seconds
            max_retries: Maximum transport-level retry attempts for 429/5xx responses
            retry_backoff_factor: Exponential backoff factor
            rate_limit: Minimum seconds between requests (0.0 = no rate limiting)
            page_size: Results requested per paginated call (max 100)
        """
        if not api_token:
            raise ValueError("Notion client requires an api_token")

        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.rate_limit = rate_limit
        self.page_size = page_size
        self.last_request_time = 0.0

        self.session = requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {api_token}',
            'Notion-Version': api_version,
            'Content-Type': 'application/json',
        })

        # Database queries are POSTs but read-only, so they are safe to retry.
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=retry_backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS", "POST"],
            respect_retry_after_header=True,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        logger.debug(f"Client configured for {self.base_url} with timeout={timeout}s, "
                     f"max_retries={max_retries}, rate_limit={rate_limit}s")

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'NotionClient':
        """
        Initialize Notion client from configuration dictionary.

        Args:
            config: Configuration dictionary with notion and advanced settings

        Returns:
            NotionClient instance
        """
        notion_config = config.get('notion', {})
        advanced_config = config.get('advanced', {})

        return cls(
            api_token=notion_config.get('api_token'),
            base_url=notion_config.get('base_url', 'https://api.notion.com/v1'),
            api_version=notion_config.get('api_version', '2022-06-28'),
            timeout=advanced_config.get('request_timeout', 30),
            max_retries=advanced_config.get('max_retries', 3),
            retry_backoff_factor=advanced_config.get('retry_backoff_factor', 2.0),
            rate_limit=advanced_config.get('rate_limit', 0.0),
            page_size=advanced_config.get('page_size', 100)
        )

    def _enforce_rate_limit(self) -> None:
        """Enforce rate limiting if configured."""
        if self.rate_limit <= 0:
            return

        time_since_last = time.time() - self.last_request_time
        if time_since_last < self.rate_limit:
            sleep_time = self.rate_limit - time_since_last
            logger.debug(f"Rate limiting: sleeping for {sleep_time:.2f}s")
            time.sleep(sleep_time)

    def _make_request(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        """
        Make HTTP request to the Notion API and return the decoded JSON body.

        Raises:
            requests.exceptions.HTTPError: For HTTP errors
            requests.exceptions.Timeout: For timeout errors
            requests.exceptions.RequestException: For other request errors
        """
        self._enforce_rate_limit()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        start_time = time.time()
        logger.debug(f"API Request: {method} {url}")

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            logger.debug(f"API Response: {response.status_code} {url} ({time.time() - start_time:.3f}s)")
            response.raise_for_status()
            return response.json()

        except requests.exceptions.Timeout:
            logger.error(f"Request timeout after {self.timeout}s: {method} {url}")
            raise

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else "unknown"
            logger.error(f"HTTP Error {status_code}: {method} {url}")

            if e.response is not None:
                try:
                    error_data = e.response.json()
                    logger.error(f"Error details: {json.dumps(error_data, indent=2)}")
                except ValueError:
                    logger.error(f"Error response: {e.response.text[:500]}")

            raise

        except requests.exceptions.RequestException as e:
            logger.error(f"Request error: {method} {url} - {str(e)}")
            raise

        finally:
            self.last_request_time = time.time()

    def query_database(
        self,
        database_id: str,
        filter: Optional[Dict[str, Any]] = None,
        sorts: Optional[List[Dict[str, Any]]] = None
    ) -> List[Dict[str, Any]]:
        """
        Query a database and return every matching page object, in API order.

        Args:
            database_id: Notion database ID
            filter: Optional Notion filter object
            sorts: Optional list of Notion sort objects

        Returns:
            List of page dictionaries
        """
        payload: Dict[str, Any] = {'page_size': self.page_size}
        if filter is not None:
            payload['filter'] = filter
        if sorts is not None:
            payload['sorts'] = sorts

        results: List[Dict[str, Any]] = []
        while True:
            data = self._make_request('POST', f'databases/{database_id}/query', json=payload)
            results.extend(data.get('results', []))

            if not data.get('has_more') or not data.get('next_cursor'):
                break

            payload = dict(payload, start_cursor=data['next_cursor'])
            logger.debug(f"Fetched {len(results)} pages so far...")

        logger.info(f"Database query returned {len(results)} pages")
        return results

    def list_block_children(self, block_id: str) -> List[Dict[str, Any]]:
        """
        List the direct children of a block or page.

        Args:
            block_id: Block or page ID

        Returns:
            List of block dictionaries, in document order
        """
        params: Dict[str, Any] = {'page_size': self.page_size}
        blocks: List[Dict[str, Any]] = []

        while True:
            data = self._make_request('GET', f'blocks/{block_id}/children', params=params)
            blocks.extend(data.get('results', []))

            if not data.get('has_more') or not data.get('next_cursor'):
                break

            params = dict(params, start_cursor=data['next_cursor'])

        logger.debug(f"Fetched {len(blocks)} child blocks of {block_id}")
        return blocks

    def close(self) -> None:
        self.session.close()


__all__ = ['NotionClient']
