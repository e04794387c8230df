"""Export package writing converted posts as Jekyll markdown files.

Package Structure:
- front_matter: Builds and renders the front matter header from page properties
- post_exporter: Names and writes ``<date>-<slug>.md`` files

Configuration Referenced:
- export.output_directory: Target directory, created if missing
- export.permalink_prefix: Path prefix of the ``permalink`` field
"""

from .front_matter import FIELD_DEFAULTS, FrontMatterBuilder, default_slug
from .post_exporter import PostExporter, calendar_date

__all__ = [
    'FIELD_DEFAULTS',
    'FrontMatterBuilder',
    'PostExporter',
    'calendar_date',
    'default_slug'
]
