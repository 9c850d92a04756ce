"""
Fence header scanning - turns ```lang {1,3-6} headers into line annotations
"""

import re
from typing import Iterable, Iterator, NamedTuple, Optional

# Every ``` or ~~~ line at the start of a line opens a block, whatever follows
# it, and the block runs to the next bare fence of the same kind.
FENCED_BLOCK_RE = re.compile(
    r'^(?P<fence>```|~~~)(?P<info>[^`\n]*)\n(?P<code>.*?)(?<=\n)(?P=fence)[ \t]*$',
    re.MULTILINE | re.DOTALL,
)

# Language is required, the {ranges} part is optional. Example: ```tsx {1,3-6}
CODE_BLOCK_HEADER_RE = re.compile(r"```(\w+)[ \t]*(?:\{([^}\n]*)\}[ \t]*)?\n")

DEFAULT_LANGUAGE = "javascript"

# Ranges past this line are dropped
MAX_LINE_NUMBER = 10000


class BlockAnnotation(NamedTuple):
    language: str
    highlighted_lines: frozenset = frozenset()


DEFAULT_ANNOTATION = BlockAnnotation(DEFAULT_LANGUAGE, frozenset())


def decode_ranges(rule: Optional[str]) -> frozenset:
    """Decode "1,3-6" into the 0-based line indexes {0, 2, 3, 4, 5}."""
    if not rule:
        return frozenset()

    indexes = set()
    for token in rule.split(','):
        bounds = token.split('-')
        try:
            numbers = [int(bound) for bound in bounds]
        except ValueError:
            continue

        if len(numbers) == 1:
            start = end = numbers[0]
        elif len(numbers) == 2:
            start, end = numbers
        else:
            continue

        # start > end leaves the range empty
        end = min(end, MAX_LINE_NUMBER)
        indexes.update(n - 1 for n in range(max(start, 1), end + 1))

    return frozenset(indexes)


def fenced_blocks(text: str) -> Iterator[re.Match]:
    """Closed fenced blocks in document order, never overlapping."""
    return FENCED_BLOCK_RE.finditer(text)


def header_annotation(block: re.Match) -> Optional[BlockAnnotation]:
    """The annotation declared by a block's opening line, if it has one."""
    if block.group('fence') != '```':
        return None
    header = CODE_BLOCK_HEADER_RE.fullmatch(f"```{block.group('info')}\n")
    if not header:
        return None
    return BlockAnnotation(header.group(1), decode_ranges(header.group(2)))


def scan_headers(text: str) -> list[BlockAnnotation]:
    """Return one annotation per fence header, in document order.

    Header-looking lines inside another block's body are code, not headers.
    """
    annotations = []
    for block in fenced_blocks(text):
        annotation = header_annotation(block)
        if annotation is not None:
            annotations.append(annotation)
    return annotations


class AnnotationCursor:
    """Hands out annotations first-in first-out, one per rendered block.

    Once the list runs dry every further block gets DEFAULT_ANNOTATION.
    """

    def __init__(self, annotations: Iterable[BlockAnnotation]):
        self._pending = list(annotations)
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self._pending) - self._position

    def next(self) -> BlockAnnotation:
        if self._position >= len(self._pending):
            return DEFAULT_ANNOTATION
        annotation = self._pending[self._position]
        self._position += 1
        return annotation
