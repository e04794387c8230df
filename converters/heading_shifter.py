"""Demotes converted headings by one level."""

from dataclasses import replace
from typing import List

from models import MarkdownBlock

HEADING_PREFIXES = {
    'heading_1': '# ',
    'heading_2': '## ',
    'heading_3': '### ',
}


def shift_heading(block: MarkdownBlock) -> MarkdownBlock:
    """Return a copy of ``block`` and its subtree with every heading demoted one level.

    A heading whose fragment does not start with its expected prefix is left as
    is. Children are always visited, whatever the parent's type.
    """
    markdown = block.markdown
    prefix = HEADING_PREFIXES.get(block.type)
    if prefix is not None and markdown.startswith(prefix):
        markdown = '#' + markdown

    return replace(
        block,
        markdown=markdown,
        children=[shift_heading(child) for child in block.children],
    )


def shift_headings(blocks: List[MarkdownBlock]) -> List[MarkdownBlock]:
    """Demote headings across a list of root blocks.

    Must run exactly once per page; the export pipeline only calls it from
    ``converters.page_to_markdown``.
    """
    return [shift_heading(block) for block in blocks]


__all__ = ['HEADING_PREFIXES', 'shift_heading', 'shift_headings']
