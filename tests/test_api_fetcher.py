"""Tests for querying published posts through the API fetcher."""

import unittest

from fetchers import ApiFetcher, DATE_ASCENDING, FetcherError, PUBLISHED_FILTER
from notion_fixtures import FakeNotionClient, page, rich_block

CONFIG = {'notion': {'database_id': 'db123'}}


class TestApiFetcher(unittest.TestCase):

    def test_single_filtered_sorted_query(self):
        client = FakeNotionClient([page('p1', date='2024-01-01')])

        ApiFetcher(CONFIG, client).fetch_published_pages()

        self.assertEqual(client.queries, [{
            'database_id': 'db123',
            'filter': {'property': 'published', 'checkbox': {'equals': True}},
            'sorts': [{'property': 'date', 'direction': 'ascending'}],
        }])
        self.assertEqual(client.queries[0]['filter'], PUBLISHED_FILTER)
        self.assertEqual(client.queries[0]['sorts'], DATE_ASCENDING)

    def test_unpublished_pages_are_dropped_and_order_kept(self):
        client = FakeNotionClient([
            page('p1', date='2024-01-01'),
            page('draft', date='2024-01-01', published=False),
            page('p2', date='2024-01-02'),
        ])

        pages = ApiFetcher(CONFIG, client).fetch_published_pages()

        self.assertEqual([p.id for p in pages], ['p1', 'p2'])

    def test_unexpected_result_object_raises(self):
        client = FakeNotionClient([{'object': 'database', 'id': 'x'}])

        with self.assertRaises(FetcherError):
            ApiFetcher(CONFIG, client).fetch_published_pages()

    def test_requires_database_id(self):
        with self.assertRaises(ValueError):
            ApiFetcher({'notion': {}}, FakeNotionClient([]))

    def test_fetch_blocks_delegates_to_client(self):
        children = [rich_block('b1', 'paragraph', 'hi')]
        client = FakeNotionClient([], {'p1': children})

        self.assertEqual(ApiFetcher(CONFIG, client).fetch_blocks('p1'), children)


if __name__ == '__main__':
    unittest.main()
