"""
Routines for extracting the shell commands listed in a Markdown document's
code blocks.

Every line of every code block (fenced or indented) in the document is
treated as a single command, in document order. Prose, headings, inline code
spans and all other Markdown constructs are ignored. For example::

    Installation
    ============

    First install the dependencies:

    ```sh
    apt-get update
    apt-get install -y curl
    ```

    Then fetch the tool:

        curl -O https://example.com/tool

Yields the commands ``apt-get update``, ``apt-get install -y curl`` and
``curl -O https://example.com/tool``.

.. autofunction:: read_commands

.. autofunction:: parse_commands


Internals
=========

The document is parsed using :py:mod:`marko` and the resulting element tree is
flattened into a stream of :py:class:`Event` tuples (see
:py:func:`iter_events`) which are then consumed by
:py:func:`commands_from_events`.

.. autoclass:: Event

.. autoclass:: EventKind
    :members:
    :undoc-members:

.. autofunction:: iter_events

.. autofunction:: commands_from_events
"""

from typing import (
    Any,
    Collection,
    Iterable,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Union,
)

import logging

from enum import Enum, auto

from pathlib import Path

from marko import Markdown, block  # type: ignore
from marko.helpers import MarkoExtension  # type: ignore
from marko.source import Source  # type: ignore

from install_md.exceptions import InputIoError, ParseMdError


logger = logging.getLogger(__name__)


# NB: marko registers an overriding element under the name of its first base
# class, so each class below derives directly from the marko element.


class CodeBlock(block.CodeBlock):  # type: ignore
    """
    Marko extension: indented code block which records the source offset of
    its first line in :py:attr:`pos`.
    """

    override = True

    pos: int

    @classmethod
    def parse(cls, source: Source) -> "CodeBlock":
        pos = source.pos
        element = cls(super().parse(source))
        element.pos = pos
        return element


class FencedCode(block.FencedCode):  # type: ignore
    """
    Marko extension: fenced code block which records the source offset of its
    opening fence in :py:attr:`pos`.
    """

    override = True

    pos: int

    @classmethod
    def parse(cls, source: Source) -> "FencedCode":
        pos = source.pos
        element = cls(super().parse(source))
        element.pos = pos
        return element


CodeBlockPositions = MarkoExtension(elements=[CodeBlock, FencedCode])


class EventKind(Enum):
    """Kinds of event produced while walking a markdown document."""

    start = auto()
    end = auto()
    text = auto()


class Event(NamedTuple):
    """A single step in the walk over a markdown document."""

    kind: EventKind

    element: Any
    """The marko element this event refers to."""

    text: str = ""
    """For :py:attr:`EventKind.text` events, the text of the element."""


def is_code_block(element: Any) -> bool:
    return isinstance(element, (block.CodeBlock, block.FencedCode))


def parse_markdown(markdown_source: str) -> Any:
    """Parse a markdown document into a marko element tree."""
    return Markdown(extensions=[CodeBlockPositions]).parse(markdown_source)


def iter_events(element: Any) -> Iterator[Event]:
    """
    Flatten a marko element tree into a depth-first series of events.

    Elements whose children are a string (raw and literal text) produce a
    single :py:attr:`EventKind.text` event. All other elements produce a
    :py:attr:`EventKind.start` event, the events of their children and finally
    an :py:attr:`EventKind.end` event.
    """
    children = getattr(element, "children", None)
    if isinstance(children, str):
        yield Event(EventKind.text, element, children)
    else:
        yield Event(EventKind.start, element)
        for child in children or []:
            yield from iter_events(child)
        yield Event(EventKind.end, element)


def is_selected(element: Any, languages: Optional[Collection[str]]) -> bool:
    """
    Should the given code block contribute commands? When a set of languages
    is given, only fenced blocks with a matching info string are selected.
    """
    if languages is None:
        return True
    return isinstance(element, block.FencedCode) and element.lang in languages


def commands_from_events(
    events: Iterable[Event],
    markdown_source: str = "",
    languages: Optional[Collection[str]] = None,
) -> List[str]:
    """
    Collect the commands from a stream of markdown events.

    Parameters
    ==========
    events : iterable of :py:class:`Event`
    markdown_source : str
        The markdown the events were produced from. Used only to produce error
        messages.
    languages : collection of str or None
        If given, only fenced code blocks annotated with one of these
        languages contribute commands.

    Returns
    =======
    [command, ...]
        The lines of all selected code blocks, in document order. Blank lines
        are omitted.

    Raises
    ======
    ParseMdError
        If a code block starts while already inside another code block.
    """
    code = ""
    inside_codeblock = False
    selected = False
    for event in events:
        if event.kind is EventKind.start and is_code_block(event.element):
            if inside_codeblock:
                raise ParseMdError.from_offset(
                    markdown_source,
                    event.element.pos,
                    "Nested codeblock",
                )
            inside_codeblock = True
            selected = is_selected(event.element, languages)
        elif event.kind is EventKind.end and is_code_block(event.element):
            inside_codeblock = False
        elif event.kind is EventKind.text and inside_codeblock and selected:
            code += event.text

    # Only "\n" (optionally preceded by "\r") ends a line; other characters
    # which str.splitlines() treats as line breaks belong to the command.
    lines = (line[:-1] if line.endswith("\r") else line for line in code.split("\n"))
    return [line for line in lines if line.strip()]


def parse_commands(
    markdown_source: str, languages: Optional[Collection[str]] = None
) -> List[str]:
    """
    Extract the commands listed in the code blocks of a markdown document.

    See :py:func:`commands_from_events` for details of the arguments and
    return value.
    """
    events = iter_events(parse_markdown(markdown_source))
    commands = commands_from_events(events, markdown_source, languages)
    logger.debug("Extracted %d commands: %r", len(commands), commands)
    return commands


def read_commands(
    install_md: Union[str, Path], languages: Optional[Collection[str]] = None
) -> List[str]:
    """
    Read a (UTF-8 encoded) markdown file and extract the commands listed in
    its code blocks.

    Raises
    ======
    InputIoError
        If the file cannot be read.
    ParseMdError
        If the code block structure is not understood.
    """
    try:
        markdown_source = Path(install_md).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputIoError(f"I/O error reading input file: {e}") from e

    logger.debug("Read %d characters from %s", len(markdown_source), install_md)
    return parse_commands(markdown_source, languages)
