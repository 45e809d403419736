"""
Dockerfile generation and building.

A :py:class:`Dockerfile` is a base image followed by a series of shell
commands, each run in its own ``RUN`` instruction. For example::

    >>> print(Dockerfile("debian:buster", ("apt-get update",)), end="")
    FROM debian:buster
    RUN apt-get update

Commands are emitted verbatim: no quoting or escaping is performed.

.. autoclass:: Dockerfile
    :members:

.. autofunction:: docker_build
"""

from typing import Tuple

import logging

import subprocess

from dataclasses import dataclass

from install_md.exceptions import DockerSpawnError, DockerBuildError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dockerfile:
    """A Dockerfile which runs a series of shell commands on a base image."""

    base: str
    """The base image name (e.g. 'debian:buster')."""

    commands: Tuple[str, ...]
    """The shell commands to run, in order."""

    def __str__(self) -> str:
        return f"FROM {self.base}\n" + "".join(
            f"RUN {command}\n" for command in self.commands
        )


def docker_build(dockerfile: Dockerfile, docker: str = "docker") -> None:
    """
    Build a docker image from the given :py:class:`Dockerfile` by running
    ``docker build -`` with the Dockerfile written to its stdin. The output of
    docker is not captured. The resulting image is not tagged or removed.

    Parameters
    ==========
    dockerfile : :py:class:`Dockerfile`
    docker : str
        The docker executable to run.

    Raises
    ======
    DockerSpawnError
        If docker could not be started or written to.
    DockerBuildError
        If docker exits with a non-zero status.
    """
    args = [docker, "build", "-"]
    logger.info("Running %s with %d commands", " ".join(args), len(dockerfile.commands))
    logger.debug("Dockerfile:\n%s", dockerfile)

    try:
        result = subprocess.run(args, input=str(dockerfile), text=True)
    except OSError as e:
        raise DockerSpawnError(f"Error spawning docker process: {e}") from e

    if result.returncode != 0:
        raise DockerBuildError(result.returncode)

    logger.info("Docker build succeeded")
