"""Converts Notion block trees into MarkdownBlock trees."""

import logging
from typing import Any, Callable, Dict, List, Optional

from models import MarkdownBlock
from .rich_text import plain_text, render_rich_text

BlockTransformer = Callable[[Dict[str, Any]], Optional[str]]

# Children of these blocks are separate pages/databases, never inlined.
NO_CHILD_FETCH_TYPES = {'child_page', 'child_database'}

CONTAINER_TYPES = {'column_list', 'column', 'synced_block', 'template'}

SILENT_TYPES = {'table_of_contents', 'breadcrumb', 'unsupported'}


class BlockConverter:
    """
    Converts a page's blocks into a tree of markdown fragments.

    Each block becomes a MarkdownBlock holding only its own fragment; nested
    blocks are converted into its children, so later passes (heading
    demotion, assembly) can walk the structure. Per-type conversion can be
    overridden with ``set_custom_transformer``.
    """

    def __init__(self, fetcher, logger: Optional[logging.Logger] = None):
        """
        Args:
            fetcher: Object exposing ``fetch_blocks(block_id)``
            logger: Logger instance (optional)
        """
        self.fetcher = fetcher
        self.logger = logger or logging.getLogger('notion_jekyll_exporter.converters.blocks')
        self.custom_transformers: Dict[str, BlockTransformer] = {}

    def set_custom_transformer(self, block_type: str, transformer: BlockTransformer) -> None:
        """Use ``transformer`` for blocks of ``block_type``.

        A transformer returning None falls back to the built-in conversion.
        """
        self.custom_transformers[block_type] = transformer

    def page_to_markdown(self, page_id: str) -> List[MarkdownBlock]:
        """Fetch a page's block tree and convert it."""
        self.logger.debug(f"Converting page {page_id}")
        return self.blocks_to_markdown(self.fetcher.fetch_blocks(page_id))

    def blocks_to_markdown(self, blocks: List[Dict[str, Any]]) -> List[MarkdownBlock]:
        """Convert sibling blocks, fetching nested children where present."""
        converted = []
        list_index = 0

        for block in blocks:
            block_type = block.get('type', 'unsupported')

            if block_type == 'numbered_list_item':
                list_index += 1
            else:
                list_index = 0

            raw_children: List[Dict[str, Any]] = []
            if block.get('has_children') and block_type not in NO_CHILD_FETCH_TYPES:
                raw_children = self.fetcher.fetch_blocks(block['id'])

            if block_type == 'table':
                markdown = self._table(block, raw_children)
                children = []
            else:
                markdown = self.block_to_markdown(block, list_index=list_index or 1)
                children = self.blocks_to_markdown(raw_children)

            converted.append(MarkdownBlock(
                type=block_type,
                block_id=block.get('id', ''),
                markdown=markdown,
                children=children,
            ))

        return converted

    def block_to_markdown(self, block: Dict[str, Any], list_index: int = 1) -> str:
        """Render the fragment for a single block, ignoring its children."""
        block_type = block.get('type', 'unsupported')

        transformer = self.custom_transformers.get(block_type)
        if transformer is not None:
            result = transformer(block)
            if result is not None:
                return result

        payload = block.get(block_type) or {}
        text = render_rich_text(payload.get('rich_text', []))

        if block_type == 'paragraph':
            return text
        if block_type == 'heading_1':
            return f"# {text}"
        if block_type == 'heading_2':
            return f"## {text}"
        if block_type == 'heading_3':
            return f"### {text}"
        if block_type == 'bulleted_list_item':
            return f"- {text}"
        if block_type == 'numbered_list_item':
            return f"{list_index}. {text}"
        if block_type == 'to_do':
            mark = 'x' if payload.get('checked') else ' '
            return f"- [{mark}] {text}"
        if block_type == 'toggle':
            return f"**{text}**" if text else ''
        if block_type == 'quote':
            return _blockquote(text)
        if block_type == 'callout':
            return _blockquote(_callout_text(payload, text))
        if block_type == 'code':
            language = payload.get('language', '')
            if language == 'plain text':
                language = ''
            code = plain_text(payload.get('rich_text', []))
            return f"```{language}\n{code}\n```"
        if block_type == 'equation':
            return f"$$\n{payload.get('expression', '')}\n$$"
        if block_type == 'divider':
            return '---'
        if block_type == 'image':
            caption = plain_text(payload.get('caption', []))
            return f"![{caption}]({_file_url(payload)})"
        if block_type in ('bookmark', 'embed', 'link_preview'):
            url = payload.get('url', '')
            caption = plain_text(payload.get('caption', [])) or url
            return f"[{caption}]({url})"
        if block_type in ('video', 'file', 'pdf', 'audio'):
            url = _file_url(payload)
            caption = plain_text(payload.get('caption', [])) or payload.get('name') or block_type
            return f"[{caption}]({url})"
        if block_type in ('child_page', 'child_database'):
            return f"**{payload.get('title', '')}**"
        if block_type in CONTAINER_TYPES:
            return ''

        if block_type not in SILENT_TYPES:
            self.logger.debug(f"No conversion for block type '{block_type}' ({block.get('id')})")
        return ''

    def _table(self, block: Dict[str, Any], rows: List[Dict[str, Any]]) -> str:
        """Render a table block and its row children as a pipe table."""
        table = block.get('table') or {}
        width = table.get('table_width', 0)

        rendered_rows = []
        for row in rows:
            cells = (row.get('table_row') or {}).get('cells', [])
            values = [render_rich_text(cell).replace('|', '\\|') for cell in cells]
            width = max(width, len(values))
            rendered_rows.append(values)

        if not rendered_rows or width == 0:
            return ''

        rendered_rows = [values + [''] * (width - len(values)) for values in rendered_rows]

        # Markdown tables need a header row; use an empty one when the table has none.
        if table.get('has_column_header'):
            header, body = rendered_rows[0], rendered_rows[1:]
        else:
            header, body = [''] * width, rendered_rows

        lines = [_table_line(header), _table_line(['---'] * width)]
        lines.extend(_table_line(values) for values in body)
        return '\n'.join(lines)


def _table_line(values: List[str]) -> str:
    return '| ' + ' | '.join(values) + ' |'


def _blockquote(text: str) -> str:
    return '\n'.join(f"> {line}" if line else '>' for line in text.split('\n'))


def _callout_text(payload: Dict[str, Any], text: str) -> str:
    icon = payload.get('icon') or {}
    if icon.get('type') == 'emoji' and icon.get('emoji'):
        return f"{icon['emoji']} {text}"
    return text


def _file_url(payload: Dict[str, Any]) -> str:
    if payload.get('type') == 'file':
        return (payload.get('file') or {}).get('url', '')
    return (payload.get('external') or {}).get('url', '')


__all__ = ['BlockConverter', 'BlockTransformer']
