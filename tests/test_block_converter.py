"""Tests for converting Notion blocks and rich text to markdown fragments."""

import unittest

from converters import BlockConverter
from converters.rich_text import plain_text, render_rich_text
from notion_fixtures import FakeBlockSource, block, rich_block, text


class TestRichText(unittest.TestCase):

    def test_plain_runs_are_concatenated(self):
        self.assertEqual(render_rich_text([text('Hello, '), text('world')]), 'Hello, world')

    def test_annotations(self):
        runs = [
            text('bold', bold=True),
            text(' '),
            text('italic', italic=True),
            text(' '),
            text('gone', strikethrough=True),
            text(' '),
            text('x = 1', code=True),
        ]

        self.assertEqual(render_rich_text(runs), '**bold** _italic_ ~~gone~~ `x = 1`')

    def test_markers_keep_surrounding_whitespace_outside(self):
        self.assertEqual(render_rich_text([text(' bold ', bold=True), text('next')]), ' **bold** next')

    def test_whitespace_only_run_is_not_wrapped(self):
        self.assertEqual(render_rich_text([text(' ', bold=True)]), ' ')

    def test_combined_annotations_and_link(self):
        run = text('docs', href='https://example.com', bold=True, italic=True)

        self.assertEqual(render_rich_text([run]), '[_**docs**_](https://example.com)')

    def test_inline_equation(self):
        run = {'type': 'equation', 'plain_text': 'E=mc^2', 'equation': {'expression': 'E=mc^2'}}

        self.assertEqual(render_rich_text([text('Energy '), run]), 'Energy $E=mc^2$')

    def test_empty_and_missing(self):
        self.assertEqual(render_rich_text([]), '')
        self.assertEqual(render_rich_text(None), '')
        self.assertEqual(plain_text([text('a', bold=True), text('b')]), 'ab')


class TestBlockConverter(unittest.TestCase):

    def setUp(self):
        self.source = FakeBlockSource({})
        self.converter = BlockConverter(self.source)

    def convert(self, *blocks):
        return [b.markdown for b in self.converter.blocks_to_markdown(list(blocks))]

    def test_headings(self):
        self.assertEqual(
            self.convert(
                rich_block('h1', 'heading_1', 'One'),
                rich_block('h2', 'heading_2', 'Two'),
                rich_block('h3', 'heading_3', 'Three'),
            ),
            ['# One', '## Two', '### Three']
        )

    def test_paragraph_with_formatting(self):
        paragraph = block('p1', 'paragraph', rich_text=[text('Hello '), text('world', bold=True)])

        self.assertEqual(self.convert(paragraph), ['Hello **world**'])

    def test_empty_paragraph(self):
        self.assertEqual(self.convert(block('p1', 'paragraph', rich_text=[])), [''])

    def test_list_items(self):
        self.assertEqual(
            self.convert(
                rich_block('b1', 'bulleted_list_item', 'apple'),
                block('t1', 'to_do', rich_text=[text('done')], checked=True),
                block('t2', 'to_do', rich_text=[text('open')], checked=False),
            ),
            ['- apple', '- [x] done', '- [ ] open']
        )

    def test_numbered_list_restarts_after_other_blocks(self):
        self.assertEqual(
            self.convert(
                rich_block('n1', 'numbered_list_item', 'one'),
                rich_block('n2', 'numbered_list_item', 'two'),
                rich_block('n3', 'numbered_list_item', 'three'),
                rich_block('p1', 'paragraph', 'break'),
                rich_block('n4', 'numbered_list_item', 'again'),
            ),
            ['1. one', '2. two', '3. three', 'break', '1. again']
        )

    def test_code_block(self):
        code = block('c1', 'code', rich_text=[text('print("hi")\nprint(2)')], language='python', caption=[])

        self.assertEqual(self.convert(code), ['```python\nprint("hi")\nprint(2)\n```'])

    def test_plain_text_code_has_no_language(self):
        code = block('c1', 'code', rich_text=[text('raw')], language='plain text')

        self.assertEqual(self.convert(code), ['```\nraw\n```'])

    def test_code_content_is_not_formatted(self):
        code = block('c1', 'code', rich_text=[text('a*b', bold=True)], language='bash')

        self.assertEqual(self.convert(code), ['```bash\na*b\n```'])

    def test_quote_and_callout(self):
        quote = block('q1', 'quote', rich_text=[text('line one\nline two')])
        callout = block('c1', 'callout', rich_text=[text('Heads up')], icon={'type': 'emoji', 'emoji': '💡'})

        self.assertEqual(
            self.convert(quote, callout),
            ['> line one\n> line two', '> 💡 Heads up']
        )

    def test_equation_and_divider(self):
        self.assertEqual(
            self.convert(block('e1', 'equation', expression='a^2 + b^2 = c^2'), block('d1', 'divider')),
            ['$$\na^2 + b^2 = c^2\n$$', '---']
        )

    def test_links_and_media(self):
        bookmark = block('bm', 'bookmark', url='https://example.com', caption=[])
        video = block('v1', 'video', type='external', external={'url': 'https://youtu.be/x'}, caption=[text('Demo')])
        image = block('i1', 'image', type='external', external={'url': 'https://x.io/a.png'}, caption=[text('Alt')])

        self.assertEqual(
            self.convert(bookmark, video, image),
            ['[https://example.com](https://example.com)', '[Demo](https://youtu.be/x)', '![Alt](https://x.io/a.png)']
        )

    def test_unknown_block_type_renders_empty(self):
        self.assertEqual(self.convert(block('u1', 'some_future_block')), [''])

    def test_children_are_fetched_and_converted(self):
        self.source.children_by_id = {
            'toggle-1': [
                rich_block('h-inner', 'heading_1', 'Inside'),
                rich_block('p-inner', 'paragraph', 'Body', has_children=True),
            ],
            'p-inner': [rich_block('b-deep', 'bulleted_list_item', 'deep')],
        }
        toggle = rich_block('toggle-1', 'toggle', 'Details', has_children=True)

        result = self.converter.blocks_to_markdown([toggle])

        self.assertEqual(self.source.requested, ['toggle-1', 'p-inner'])
        self.assertEqual(result[0].markdown, '**Details**')
        self.assertEqual([c.markdown for c in result[0].children], ['# Inside', 'Body'])
        self.assertEqual(result[0].children[1].children[0].markdown, '- deep')
        self.assertEqual(result[0].children[1].children[0].block_id, 'b-deep')

    def test_child_pages_are_not_descended_into(self):
        child_page = block('cp1', 'child_page', has_children=True, title='Sub page')

        result = self.converter.blocks_to_markdown([child_page])

        self.assertEqual(self.source.requested, [])
        self.assertEqual(result[0].markdown, '**Sub page**')
        self.assertEqual(result[0].children, [])

    def test_columns_are_transparent_containers(self):
        self.source.children_by_id = {
            'cols': [block('col-a', 'column', has_children=True)],
            'col-a': [rich_block('h', 'heading_2', 'In column')],
        }

        result = self.converter.blocks_to_markdown([block('cols', 'column_list', has_children=True)])

        self.assertEqual(result[0].markdown, '')
        self.assertEqual(result[0].children[0].children[0].markdown, '## In column')

    def test_table_rows_become_pipe_table(self):
        self.source.children_by_id = {
            'tbl': [
                block('r1', 'table_row', cells=[[text('Name')], [text('Value')]]),
                block('r2', 'table_row', cells=[[text('a|b')], [text('2', bold=True)]]),
            ]
        }
        table = block('tbl', 'table', has_children=True, table_width=2,
                      has_column_header=True, has_row_header=False)

        result = self.converter.blocks_to_markdown([table])

        self.assertEqual(
            result[0].markdown,
            '| Name | Value |\n| --- | --- |\n| a\\|b | **2** |'
        )
        self.assertEqual(result[0].children, [])

    def test_table_without_header_gets_empty_header_row(self):
        self.source.children_by_id = {'tbl': [block('r1', 'table_row', cells=[[text('x')], [text('y')]])]}
        table = block('tbl', 'table', has_children=True, table_width=2, has_column_header=False)

        result = self.converter.blocks_to_markdown([table])

        self.assertEqual(result[0].markdown, '|  |  |\n| --- | --- |\n| x | y |')

    def test_custom_transformer_overrides_and_falls_back(self):
        self.converter.set_custom_transformer('divider', lambda b: '***')
        self.converter.set_custom_transformer('paragraph', lambda b: None)

        self.assertEqual(
            self.convert(block('d1', 'divider'), rich_block('p1', 'paragraph', 'kept')),
            ['***', 'kept']
        )

    def test_page_to_markdown_fetches_page_children(self):
        self.source.children_by_id = {'page-1': [rich_block('p1', 'paragraph', 'hello')]}

        result = self.converter.page_to_markdown('page-1')

        self.assertEqual(self.source.requested, ['page-1'])
        self.assertEqual(result[0].type, 'paragraph')
        self.assertEqual(result[0].markdown, 'hello')


if __name__ == '__main__':
    unittest.main()
