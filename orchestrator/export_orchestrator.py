"""
Export orchestrator for the Notion to Jekyll pipeline.

Sequences the run: Fetch → Convert → Shift headings → Assemble → Front matter → Write.
Pages are processed one at a time in query order. Nothing is caught here; the
first failure ends the run and files written for earlier pages stay on disk.
"""

import logging
from typing import List, Optional

from converters import BlockConverter, page_to_markdown
from exporters import FrontMatterBuilder, PostExporter
from fetchers import BaseFetcher
from logger import ProgressTracker
from models import ExportStatus, NotionPage, RenderedDocument


class ExportOrchestrator:
    """Central coordinator running every published page through the export pipeline."""

    def __init__(
        self,
        fetcher: BaseFetcher,
        converter: BlockConverter,
        front_matter_builder: FrontMatterBuilder,
        exporter: PostExporter,
        logger: Optional[logging.Logger] = None
    ):
        self.fetcher = fetcher
        self.converter = converter
        self.front_matter_builder = front_matter_builder
        self.exporter = exporter
        self.logger = logger or logging.getLogger('notion_jekyll_exporter.orchestrator')

    def render_page(self, page: NotionPage) -> RenderedDocument:
        """Produce the output document for one page without writing it."""
        body = page_to_markdown(self.converter, page.id)

        front_matter = self.front_matter_builder.build(page)
        header = self.front_matter_builder.render(front_matter)

        return RenderedDocument(
            filename=self.exporter.filename_for(front_matter),
            front_matter=header,
            body=body,
        )

    def run(self, dry_run: bool = False) -> List[ExportStatus]:
        """
        Export every published page.

        Args:
            dry_run: Render documents but write nothing

        Returns:
            One ExportStatus per page, in processing order
        """
        pages = self.fetcher.fetch_published_pages()
        self.logger.info(f"Converting {len(pages)} post(s)...")

        results: List[ExportStatus] = []
        with ProgressTracker(total=len(pages), logger=self.logger) as tracker:
            for page in pages:
                document = self.render_page(page)

                if dry_run:
                    self.logger.info(f"Would generate: {document.filename}")
                    status = 'dry_run'
                else:
                    self.exporter.write(document)
                    self.logger.info(f"Generated: {document.filename}")
                    status = 'written'

                results.append(ExportStatus(page_id=page.id, filename=document.filename, status=status))
                tracker.advance(document.filename)

        return results
