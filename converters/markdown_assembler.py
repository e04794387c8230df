"""Flattens a converted block tree into a markdown document body."""

from typing import Iterator, List

from models import MarkdownBlock

# Content nested under these blocks belongs to the list item and is indented.
LIST_ITEM_TYPES = {'bulleted_list_item', 'numbered_list_item', 'to_do'}

INDENT = '    '


def _indent(markdown: str, depth: int) -> str:
    if depth == 0:
        return markdown
    prefix = INDENT * depth
    return '\n'.join(prefix + line if line else line for line in markdown.split('\n'))


def _fragments(block: MarkdownBlock, depth: int) -> Iterator[str]:
    if block.markdown:
        yield _indent(block.markdown, depth)

    child_depth = depth + 1 if block.type in LIST_ITEM_TYPES else depth
    for child in block.children:
        yield from _fragments(child, child_depth)


def to_markdown_string(blocks: List[MarkdownBlock]) -> str:
    """Concatenate fragments depth-first, parent before children, in source order.

    Empty fragments (pure containers, unsupported blocks) are skipped; the rest
    are separated by a blank line. Children of list items are indented one
    level per list item above them so nested lists and code stay inside their
    item. Fragments are not validated otherwise.
    """
    fragments = [
        fragment
        for block in blocks
        for fragment in _fragments(block, 0)
    ]
    if not fragments:
        return ''
    return '\n\n'.join(fragments) + '\n'


__all__ = ['to_markdown_string']
