"""Fetchers package for retrieving posts from a Notion database."""

from .base_fetcher import BaseFetcher, FetcherError
from .api_fetcher import ApiFetcher, DATE_ASCENDING, PUBLISHED_FILTER

__all__ = [
    'BaseFetcher',
    'FetcherError',
    'ApiFetcher',
    'DATE_ASCENDING',
    'PUBLISHED_FILTER'
]
