"""Data models for the Notion to Jekyll export pipeline."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _first_plain_text(prop: Optional[Dict[str, Any]], kind: str) -> Optional[str]:
    """Return the plain text of the first run of a title/rich_text property.

    An absent property, an empty run list or an empty first run all yield None.
    """
    if not isinstance(prop, dict):
        return None
    runs = prop.get(kind)
    if not runs:
        return None
    text = runs[0].get('plain_text')
    if text is None or text == '':
        return None
    return text


def _select_name(prop: Optional[Dict[str, Any]]) -> Optional[str]:
    if not isinstance(prop, dict):
        return None
    select = prop.get('select')
    if select is None:
        return None
    name = select.get('name')
    if name is None or name == '':
        return None
    return name


def _multi_select_names(prop: Optional[Dict[str, Any]]) -> Optional[List[str]]:
    if not isinstance(prop, dict):
        return None
    options = prop.get('multi_select')
    if options is None:
        return None
    return [option['name'] for option in options]


def _date_start(prop: Optional[Dict[str, Any]]) -> Optional[str]:
    if not isinstance(prop, dict):
        return None
    date = prop.get('date')
    if date is None:
        return None
    start = date.get('start')
    if start is None or start == '':
        return None
    return start


@dataclass
class PageProperties:
    """Typed view of the properties a post page carries.

    Every field is optional; defaults are applied later by the front matter
    builder, never here.
    """

    title: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    date: Optional[str] = None
    published: bool = False

    @classmethod
    def from_api(cls, properties: Optional[Dict[str, Any]]) -> 'PageProperties':
        """Extract known fields from a Notion page ``properties`` object."""
        properties = properties or {}
        published_prop = properties.get('published') or {}
        return cls(
            title=_first_plain_text(properties.get('title'), 'title'),
            slug=_first_plain_text(properties.get('page_id'), 'rich_text'),
            description=_first_plain_text(properties.get('description'), 'rich_text'),
            thumbnail_url=_first_plain_text(properties.get('thumbnail_url'), 'rich_text'),
            category=_select_name(properties.get('category')),
            tags=_multi_select_names(properties.get('tags')),
            date=_date_start(properties.get('date')),
            published=published_prop.get('checkbox') is True,
        )


@dataclass
class NotionPage:
    """A single database entry (one post)."""

    id: str
    properties: PageProperties = field(default_factory=PageProperties)
    url: Optional[str] = None
    created_time: Optional[str] = None
    last_edited_time: Optional[str] = None

    @property
    def published(self) -> bool:
        return self.properties.published

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'NotionPage':
        """Build a page from a raw database query result object."""
        return cls(
            id=data['id'],
            properties=PageProperties.from_api(data.get('properties')),
            url=data.get('url'),
            created_time=data.get('created_time'),
            last_edited_time=data.get('last_edited_time'),
        )


@dataclass
class MarkdownBlock:
    """A converted block: its own markdown fragment plus converted children."""

    type: str
    block_id: str
    markdown: str
    children: List['MarkdownBlock'] = field(default_factory=list)


@dataclass
class FrontMatter:
    """Resolved front matter values for one post, defaults already applied."""

    title: str
    slug: str
    description: str
    category: str
    tags: List[str]
    date: str
    thumbnail_url: Optional[str] = None


@dataclass
class RenderedDocument:
    """Header and body of one output file."""

    filename: str
    front_matter: str
    body: str

    @property
    def content(self) -> str:
        return self.front_matter + self.body


@dataclass
class ExportStatus:
    """Outcome of one page in an export run."""

    page_id: str
    filename: str
    status: str  # "written", "dry_run"


__all__ = [
    'PageProperties',
    'NotionPage',
    'MarkdownBlock',
    'FrontMatter',
    'RenderedDocument',
    'ExportStatus'
]
