"""
Options controlling how installation instructions are turned into a
Dockerfile.

Documented installation instructions frequently omit flags which are required
for non-interactive use (e.g. ``apt-get install`` without ``-y``). Extra flags
may be spliced into every command starting with a given prefix::

    >>> options = Options().flag("apt-get", "-y").flag("apt-get", "-q")
    >>> apply_extra_flags(options.extra_flags, ["apt-get install curl"])
    ['apt-get -y -q install curl']

.. autoclass:: Options
    :members:

.. autofunction:: apply_extra_flags
"""

from typing import (
    FrozenSet,
    Iterable,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Tuple,
    Union,
)

from dataclasses import dataclass, field


@dataclass
class Options:
    """
    Options for :py:func:`install_md.build_markdown`.

    Flags are added using the :py:meth:`flag` method, which may be chained.
    """

    extra_flags: MutableMapping[str, str] = field(default_factory=dict)
    """
    Mapping from command prefix (e.g. 'apt-get') to the flags to insert
    immediately after that prefix. Each value starts with a space.
    """

    languages: Optional[FrozenSet[str]] = None
    """
    If not None, only fenced code blocks annotated with one of these
    languages (e.g. 'sh') are extracted. Otherwise all code blocks are.
    """

    docker: str = "docker"
    """The docker executable to build with."""

    def flag(self, tool: str, flag: str) -> "Options":
        """
        Add a flag to be inserted after the named tool. Repeated calls for the
        same tool accumulate rather than replace earlier flags.
        """
        self.extra_flags[tool] = self.extra_flags.get(tool, "") + " " + flag
        return self

    @classmethod
    def from_flags(
        cls, flags: Union[Mapping[str, str], Iterable[Tuple[str, str]]]
    ) -> "Options":
        """Construct an :py:class:`Options` from (tool, flag) pairs or a dict."""
        if isinstance(flags, Mapping):
            flags = flags.items()
        options = cls()
        for tool, flag in flags:
            options.flag(tool, flag)
        return options


def apply_extra_flags(flags: Mapping[str, str], commands: Iterable[str]) -> List[str]:
    """
    Return a copy of the commands with the flags for any matching prefix
    inserted immediately after that prefix.

    Where several prefixes match one command, all of their flags are inserted,
    in the order the prefixes were added to the mapping. Later prefixes are
    matched against the command as already modified by earlier ones.
    """
    out = []
    for command in commands:
        for prefix, flag in flags.items():
            if command.startswith(prefix):
                command = command[: len(prefix)] + flag + command[len(prefix) :]
        out.append(command)
    return out


def tool_flag(argument: str) -> Tuple[str, str]:
    """
    Parse a "TOOL=FLAG" string (e.g. "apt-get=-y") into a (tool, flag) pair.
    Throws a :py:exc:`ValueError` if this fails.
    """
    tool, sep, flag = argument.partition("=")
    if not sep or not tool or not flag:
        raise ValueError(f"expected TOOL=FLAG, got {argument!r}")
    return (tool, flag)

