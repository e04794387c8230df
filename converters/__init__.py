"""Converters package for turning Notion block trees into markdown."""

from .block_converter import BlockConverter
from .errors import ConversionError, UnsupportedImageSourceError
from .heading_shifter import shift_headings
from .image_transformer import ImageProxyTransformer
from .markdown_assembler import to_markdown_string
from .rich_text import render_rich_text


def page_to_markdown(converter: BlockConverter, page_id: str) -> str:
    """
    Convenience function converting one page to a markdown body.

    This runs the body half of the export pipeline:
    1. Fetch and convert the block tree (custom transformers applied)
    2. Demote every heading one level, once
    3. Flatten the tree into a single markdown string

    Args:
        converter: BlockConverter bound to a fetcher
        page_id: Notion page ID

    Returns:
        Markdown body text

    Example:
        >>> converter = BlockConverter(fetcher)
        >>> converter.set_custom_transformer('image', ImageProxyTransformer())
        >>> body = page_to_markdown(converter, page.id)
    """
    blocks = converter.page_to_markdown(page_id)
    return to_markdown_string(shift_headings(blocks))


__all__ = [
    'page_to_markdown',
    'BlockConverter',
    'ConversionError',
    'UnsupportedImageSourceError',
    'ImageProxyTransformer',
    'render_rich_text',
    'shift_headings',
    'to_markdown_string'
]
