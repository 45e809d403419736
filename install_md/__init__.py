"""
Checks that the installation instructions in a Markdown document (e.g. an
``INSTALL.md`` file) actually work by running them in a fresh docker image.

Every line of every code block in the document is treated as a shell command
and run, in document order, on top of a chosen base image. For example, given
the following ``INSTALL.md``::

    Installation
    ============

    ```sh
    apt-get update
    apt-get install curl
    ```

The instructions may be tested (e.g. from a test suite) using::

    >>> from install_md import build_markdown, Options
    >>> build_markdown(
    ...     "debian:buster",
    ...     Options().flag("apt-get", "-y"),
    ...     "INSTALL.md",
    ... )

Which runs ``docker build -`` on the following Dockerfile, throwing an
:py:exc:`~install_md.exceptions.InstallMdError` if the build fails::

    FROM debian:buster
    RUN apt-get -y update
    RUN apt-get -y install curl

API
===

.. autofunction:: build_markdown

.. autofunction:: render_markdown

See also :py:class:`install_md.options.Options` and
:py:mod:`install_md.exceptions`.
"""

from typing import Optional, Union

import logging

from pathlib import Path

from install_md.exceptions import (
    InstallMdError,
    InputIoError,
    ParseMdError,
    DockerSpawnError,
    DockerBuildError,
)
from install_md.extract import read_commands, parse_commands
from install_md.options import Options, apply_extra_flags
from install_md.dockerfile import Dockerfile, docker_build

__version__ = "1.0"

__all__ = [
    "build_markdown",
    "render_markdown",
    "read_commands",
    "parse_commands",
    "apply_extra_flags",
    "docker_build",
    "Options",
    "Dockerfile",
    "InstallMdError",
    "InputIoError",
    "ParseMdError",
    "DockerSpawnError",
    "DockerBuildError",
]


logger = logging.getLogger(__name__)


def render_markdown(
    docker_base: str,
    options: Optional[Options] = None,
    install_md: Union[str, Path] = "INSTALL.md",
) -> Dockerfile:
    """
    Produce the :py:class:`~install_md.dockerfile.Dockerfile` which
    :py:func:`build_markdown` would build, without building it.
    """
    if options is None:
        options = Options()

    commands = read_commands(install_md, options.languages)
    commands = apply_extra_flags(options.extra_flags, commands)
    logger.debug("Commands after adding extra flags: %r", commands)

    return Dockerfile(docker_base, tuple(commands))


def build_markdown(
    docker_base: str,
    options: Optional[Options] = None,
    install_md: Union[str, Path] = "INSTALL.md",
) -> None:
    """
    Build a docker image by running the commands in the code blocks of a
    markdown file.

    Parameters
    ==========
    docker_base : str
        The docker image to start from (e.g. 'debian:buster').
    options : :py:class:`~install_md.options.Options` or None
        Extra flags to add to commands and other options.
    install_md : str or Path
        The markdown file containing the instructions.

    Raises
    ======
    InputIoError
        If the markdown file could not be read.
    ParseMdError
        If the markdown code blocks could not be understood.
    DockerSpawnError
        If docker could not be run.
    DockerBuildError
        If the docker build failed (e.g. because a command failed).
    """
    if options is None:
        options = Options()

    dockerfile = render_markdown(docker_base, options, install_md)
    docker_build(dockerfile, options.docker)
