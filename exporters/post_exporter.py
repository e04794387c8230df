"""Writes rendered posts to the output directory."""

import logging
from pathlib import Path
from typing import Optional, Union

from dateutil.parser import isoparse

from models import FrontMatter, RenderedDocument


def calendar_date(value: str) -> str:
    """Return the ``YYYY-MM-DD`` part of an ISO 8601 date or datetime."""
    return isoparse(value).date().isoformat()


class PostExporter:
    """
    Writes one markdown file per post.

    Files are named ``<date>-<slug>.md``; an existing file of the same name is
    overwritten. The output directory is created on first write.
    """

    def __init__(self, output_directory: Union[str, Path], logger: Optional[logging.Logger] = None):
        self.output_directory = Path(output_directory)
        self.logger = logger or logging.getLogger('notion_jekyll_exporter.exporters.post_exporter')

    @staticmethod
    def filename_for(front_matter: FrontMatter) -> str:
        return f"{calendar_date(front_matter.date)}-{front_matter.slug}.md"

    def write(self, document: RenderedDocument) -> Path:
        """
        Write header and body in a single write.

        Raises:
            OSError: If the directory cannot be created or the file written
        """
        self.output_directory.mkdir(parents=True, exist_ok=True)

        path = self.output_directory / document.filename
        if path.exists():
            self.logger.debug(f"Overwriting existing file {path}")

        content = document.content
        path.write_text(content, encoding='utf-8')
        self.logger.debug(f"Wrote {len(content)} characters to {path}")
        return path


__all__ = ['PostExporter', 'calendar_date']
