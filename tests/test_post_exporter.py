"""Tests for naming and writing post files."""

import tempfile
import unittest
from pathlib import Path

from exporters import PostExporter, calendar_date
from models import FrontMatter, RenderedDocument


def front_matter(date, slug):
    return FrontMatter(title='t', slug=slug, description='', category='blog', tags=[], date=date)


class TestFilename(unittest.TestCase):

    def test_date_and_slug(self):
        self.assertEqual(PostExporter.filename_for(front_matter('2024-01-02', 'my-post')), '2024-01-02-my-post.md')

    def test_datetime_start_uses_its_calendar_date(self):
        self.assertEqual(
            PostExporter.filename_for(front_matter('2024-01-02T23:30:00.000+09:00', 'late')),
            '2024-01-02-late.md'
        )

    def test_calendar_date_rejects_garbage(self):
        with self.assertRaises(ValueError):
            calendar_date('not a date')


class TestWrite(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.output_dir = Path(self.tmp.name) / 'site' / '_posts'
        self.exporter = PostExporter(self.output_dir)

    def test_creates_directory_and_writes_header_then_body(self):
        document = RenderedDocument(filename='2024-01-01-a.md', front_matter='---\ntitle: "A"\n---\n\n', body='Body ü\n')

        path = self.exporter.write(document)

        self.assertEqual(path, self.output_dir / '2024-01-01-a.md')
        self.assertEqual(path.read_text(encoding='utf-8'), '---\ntitle: "A"\n---\n\nBody ü\n')

    def test_overwrites_existing_file(self):
        self.output_dir.mkdir(parents=True)
        (self.output_dir / '2024-01-01-a.md').write_text('old content that is longer', encoding='utf-8')

        self.exporter.write(RenderedDocument(filename='2024-01-01-a.md', front_matter='---\n---\n\n', body='new'))

        self.assertEqual((self.output_dir / '2024-01-01-a.md').read_text(encoding='utf-8'), '---\n---\n\nnew')

    def test_write_failure_propagates(self):
        blocker = Path(self.tmp.name) / 'blocker'
        blocker.write_text('not a directory', encoding='utf-8')
        exporter = PostExporter(blocker / '_posts')

        with self.assertRaises(OSError):
            exporter.write(RenderedDocument(filename='x.md', front_matter='', body=''))


if __name__ == '__main__':
    unittest.main()
