"""
The ``install-md`` command checks the installation instructions in a Markdown
file by running the commands in its code blocks in a docker build.

.. highlight:: bash

Basic usage
===========

.. code:: text

    $ install-md BASE_IMAGE [MARKDOWN_FILE]

Every line of every code block in MARKDOWN_FILE (``INSTALL.md`` by default) is
run as a ``RUN`` instruction on top of BASE_IMAGE (e.g. ``debian:buster``). The
exit status is non-zero if the instructions could not be read or if the build
fails.

Extra flags
===========

Flags which documented commands omit (e.g. ``-y`` for ``apt-get``) may be
added to every command starting with a given tool using ``--flag`` or ``-f``::

    $ install-md -f apt-get=-y -f apt-get=--no-install-recommends debian:buster

Selecting code blocks
=====================

By default all code blocks are run. To only run fenced code blocks annotated
with a particular language, use ``--language`` or ``-l`` (may be given
multiple times)::

    $ install-md -l sh -l bash debian:buster README.md

Dry runs
========

The ``--dry-run`` or ``-n`` argument prints the generated Dockerfile rather
than building it.
"""

import sys

import logging

from argparse import ArgumentParser

from pathlib import Path

from install_md import render_markdown
from install_md.options import Options, tool_flag
from install_md.dockerfile import docker_build
from install_md.exceptions import InstallMdError


def main() -> None:
    parser = ArgumentParser(
        description="""
            Check the installation instructions in a markdown file by running
            them in a docker build.
        """,
    )

    parser.add_argument(
        "base",
        help="""
            The docker image to run the instructions on (e.g. debian:buster).
        """,
    )
    parser.add_argument(
        "markdown",
        type=Path,
        nargs="?",
        default=Path("INSTALL.md"),
        help="""
            The markdown file containing the instructions. Defaults to
            INSTALL.md.
        """,
    )

    parser.add_argument(
        "--flag",
        "-f",
        type=tool_flag,
        action="append",
        default=[],
        metavar="TOOL=FLAG",
        help="""
            Insert FLAG after TOOL in every command starting with TOOL. May be
            given multiple times; flags for the same tool accumulate.
        """,
    )
    parser.add_argument(
        "--language",
        "-l",
        action="append",
        default=None,
        metavar="LANG",
        help="""
            Only run fenced code blocks annotated with this language. May be
            given multiple times. By default, all code blocks are run.
        """,
    )
    parser.add_argument(
        "--docker",
        default="docker",
        metavar="EXECUTABLE",
        help="""
            The docker executable to use. Defaults to 'docker'.
        """,
    )
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="""
            Print the generated Dockerfile instead of building it.
        """,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="""
            Log the extracted commands and build progress.
        """,
    )

    args = parser.parse_args()

    logging.basicConfig(format="%(levelname)s: %(name)s: %(message)s")
    logging.getLogger("install_md").setLevel(
        logging.DEBUG if args.verbose else logging.WARNING
    )

    options = Options.from_flags(args.flag)
    options.docker = args.docker
    if args.language is not None:
        options.languages = frozenset(args.language)

    try:
        dockerfile = render_markdown(args.base, options, args.markdown)
        if args.dry_run:
            sys.stdout.write(str(dockerfile))
        else:
            docker_build(dockerfile, options.docker)
    except InstallMdError as e:
        sys.stderr.write(f"{e}\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
