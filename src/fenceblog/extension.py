"""
Python-Markdown extension for ```lang {ranges} fenced code blocks

Replaces fenced_code: ``` blocks with a ```lang header are highlighted, any
other ``` or ~~~ block is rendered as plain escaped code.
"""

from html import escape

import markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor

from .annotations import AnnotationCursor, fenced_blocks, header_annotation, scan_headers
from .highlight import acquire_highlighter, render_code

# 'extra' without fenced_code, which CodeFenceExtension replaces
BASE_EXTENSIONS = ['abbr', 'attr_list', 'def_list', 'footnotes', 'md_in_html', 'tables']


class CodeFencePreprocessor(Preprocessor):
    """Replace fenced blocks with highlighted HTML.

    Every call scans its own text and walks a fresh cursor, so annotations
    never leak from one document into the next.
    """

    def __init__(self, md, config):
        super().__init__(md)
        self.code_renderer = config['code_renderer']

    def run(self, lines):
        text = '\n'.join(lines)
        cursor = AnnotationCursor(scan_headers(text))
        pieces = []
        position = 0

        with acquire_highlighter() as highlighter:
            for block in fenced_blocks(text):
                if header_annotation(block) is not None:
                    # an empty block still owns its header's annotation
                    code = block.group('code') or '\n'
                    html = self.code_renderer(code, cursor, highlighter)
                else:
                    html = f'<pre><code>{escape(block.group("code"))}</code></pre>'
                placeholder = self.md.htmlStash.store(html)
                pieces.extend((text[position:block.start()], '\n', placeholder, '\n'))
                position = block.end()

        pieces.append(text[position:])
        return ''.join(pieces).split('\n')


class InlineCodeTreeprocessor(Treeprocessor):
    """Mark inline <code> spans with the "quote" class."""

    def run(self, root):
        in_pre = {id(code) for pre in root.iter('pre') for code in pre.iter('code')}
        for code in root.iter('code'):
            if id(code) in in_pre:
                continue
            classes = code.get('class', '').split()
            if 'quote' not in classes:
                code.set('class', ' '.join(classes + ['quote']))


class CodeFenceExtension(Extension):
    def __init__(self, **kwargs):
        self.config = {
            'code_renderer': [render_code, 'Callable(code, cursor, highlighter) -> html'],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        md.registerExtension(self)
        md.preprocessors.register(CodeFencePreprocessor(md, self.getConfigs()), 'fenceblog_code', 25)
        md.treeprocessors.register(InlineCodeTreeprocessor(md), 'fenceblog_inline_code', 5)


def makeExtension(**kwargs):
    return CodeFenceExtension(**kwargs)


def render_markdown(text: str) -> str:
    """Convert a Markdown document to HTML with highlighted code blocks."""
    md = markdown.Markdown(extensions=BASE_EXTENSIONS + [CodeFenceExtension()])
    return md.convert(text)
