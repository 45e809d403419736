from typing import Callable

import pytest

from pathlib import Path


FakeDocker = Callable[[int], Path]


@pytest.fixture
def fake_docker(tmp_path: Path) -> FakeDocker:
    """
    Returns a function which creates a stand-in for the docker executable. The
    stand-in records its arguments in 'args' and its stdin in 'stdin' (both in
    the same directory as the executable) and exits with the given status.
    """

    def make(status: int = 0) -> Path:
        directory = tmp_path / "fake_docker"
        directory.mkdir(exist_ok=True)
        executable = directory / "docker"
        executable.write_text(
            "#!/bin/sh\n"
            f'echo "$@" > "{directory}/args"\n'
            f'cat > "{directory}/stdin"\n'
            f"exit {status}\n"
        )
        executable.chmod(0o755)
        return executable

    return make
