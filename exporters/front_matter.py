"""Front matter generation for exported posts."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import yaml

from models import FrontMatter, NotionPage


def _today() -> str:
    return datetime.now().strftime('%Y-%m-%d')


def default_slug(page_id: str) -> str:
    """Permalink slug used when a page has none: its ID without dashes."""
    return page_id.replace('-', '')


@dataclass(frozen=True)
class FieldDefault:
    """Fallback for one front matter field, called as ``value(page, today)``."""

    value: Callable[[NotionPage, Callable[[], str]], Any]
    log_when_used: bool = True


# Value used for each field when the page property is absent.
FIELD_DEFAULTS: Dict[str, FieldDefault] = {
    'title': FieldDefault(lambda page, today: 'Untitled'),
    'slug': FieldDefault(lambda page, today: default_slug(page.id)),
    'description': FieldDefault(lambda page, today: ''),
    # No thumbnail: the image block is omitted.
    'thumbnail_url': FieldDefault(lambda page, today: None, log_when_used=False),
    'category': FieldDefault(lambda page, today: 'blog'),
    'tags': FieldDefault(lambda page, today: []),
    'date': FieldDefault(lambda page, today: today()),
}


def quoted_scalar(value: str) -> str:
    """Render ``value`` as a single-line double-quoted YAML scalar.

    Line breaks and control characters come out as escapes, so the value
    survives a YAML round trip unchanged.
    """
    text = yaml.dump(value, default_style='"', allow_unicode=True, width=1000)
    if text.endswith('\n...\n'):
        text = text[:-len('...\n')]
    return text.rstrip('\n')


class FrontMatterBuilder:
    """Builds the Jekyll front matter header for a page."""

    def __init__(
        self,
        permalink_prefix: str = '/posts/',
        today: Optional[Callable[[], str]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            permalink_prefix: Path prepended to the slug in ``permalink``
            today: Returns the fallback date as ``YYYY-MM-DD`` (defaults to the local date)
            logger: Logger instance (optional)
        """
        self.permalink_prefix = permalink_prefix
        self.today = today or _today
        self.logger = logger or logging.getLogger('notion_jekyll_exporter.exporters.front_matter')

    def build(self, page: NotionPage) -> FrontMatter:
        """Resolve every front matter field, applying the default for absent ones."""
        properties = page.properties
        values: Dict[str, Any] = {}

        for name, default in FIELD_DEFAULTS.items():
            value = getattr(properties, name)
            if value is None:
                value = default.value(page, self.today)
                if default.log_when_used:
                    self.logger.debug(f"Page {page.id}: '{name}' missing, using default {value!r}")
            values[name] = value

        return FrontMatter(
            title=values['title'],
            slug=values['slug'],
            description=values['description'],
            category=values['category'],
            tags=list(values['tags']),
            date=values['date'],
            thumbnail_url=values['thumbnail_url'],
        )

    def render(self, front_matter: FrontMatter) -> str:
        """
        Render the header block, including the closing marker and a blank line.

        Every field keeps its own line; quoted values are emitted by PyYAML.
        An empty tag list renders as ``tags: [""]``.
        """
        tags = ', '.join(quoted_scalar(tag) for tag in front_matter.tags) or '""'

        lines: List[str] = [
            '---',
            f'title: {quoted_scalar(front_matter.title)}',
            f'date: {front_matter.date}',
            f'categories: [{quoted_scalar(front_matter.category)}]',
            f'tags: [{tags}]',
            f'description: {quoted_scalar(front_matter.description)}',
            f'permalink: {self.permalink_prefix}{front_matter.slug}',
            'math: true',
        ]

        if front_matter.thumbnail_url is not None:
            lines.extend([
                'image:',
                f'  path: {quoted_scalar(front_matter.thumbnail_url)}',
                '  alt: "preview image"',
            ])

        lines.append('---')
        return '\n'.join(lines) + '\n\n'


__all__ = ['FIELD_DEFAULTS', 'FieldDefault', 'FrontMatterBuilder', 'default_slug', 'quoted_scalar']
