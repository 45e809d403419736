"""
All errors raised while building a markdown document's installation
instructions derive from :py:exc:`InstallMdError`.

.. autoexception:: InstallMdError

.. autoexception:: InputIoError

.. autoexception:: ParseMdError
    :members:

.. autoexception:: DockerSpawnError

.. autoexception:: DockerBuildError
    :members:
"""

from dataclasses import dataclass

from peggie.error_message_generation import (
    offset_to_line_and_column,
    extract_line,
    format_error_message,
)


class InstallMdError(Exception):
    """Base class for exceptions thrown while building installation instructions."""


class InputIoError(InstallMdError):
    """Thrown when the markdown file cannot be opened or read."""


@dataclass
class ParseMdError(InstallMdError):
    """
    Thrown when the markdown code block structure is not understood (i.e. a
    code block was started within another code block).
    """

    line: int
    column: int
    snippet: str
    """The source code location and snippet of the cause of the problem."""

    explanation: str

    def __str__(self) -> str:
        return format_error_message(
            self.line, self.column, self.snippet, self.explanation
        )

    @classmethod
    def from_offset(
        cls, source: str, offset: int, explanation: str
    ) -> "ParseMdError":
        line, column = offset_to_line_and_column(source, offset)
        snippet = extract_line(source, line)
        return cls(line, column, snippet, explanation)


class DockerSpawnError(InstallMdError):
    """
    Thrown when the docker process could not be started or the Dockerfile
    could not be written to it.
    """


@dataclass
class DockerBuildError(InstallMdError):
    """Thrown when the docker build exits with a non-zero status."""

    returncode: int
    """
    The exit status of the docker process. Its meaning is defined by docker
    and is not interpreted here.
    """

    def __str__(self) -> str:
        return f"Docker failed with exit status: {self.returncode}"
