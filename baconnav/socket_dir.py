"""Resolution of the directory holding bacon's control socket.

A successful lookup is cached on the session and reused for as long as the
socket file is still present in that directory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .paths import file_exists, split_path
from .search import find_files_recursive

if TYPE_CHECKING:
    from .session import BaconSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SocketResolution:
    directory: Path | None
    error: str | None = None
    candidates: tuple[Path, ...] = ()

    @property
    def ok(self) -> bool:
        return self.directory is not None


def has_socket_file(directory: Path, socket_filename: str) -> bool:
    return file_exists(directory / socket_filename)


def resolve_socket_dir(session: BaconSession) -> SocketResolution:
    """Find the unique directory holding the socket file.

    Zero or several socket files are failures; the latter lists every
    candidate directory so the user can pick one by hand.
    """
    socket_filename = session.settings.socket_filename
    cached = session.cached_socket_dir
    if cached is not None and has_socket_file(cached, socket_filename):
        logger.debug("socket dir cache hit: %s", cached)
        return SocketResolution(directory=cached)

    found = find_files_recursive(session.project_root(), socket_filename, session.ignore_evaluator)
    if not found:
        session.cached_socket_dir = None
        return SocketResolution(directory=None, error=f"No {socket_filename} file found in project")

    if len(found) == 1:
        directory, _name = split_path(found[0])
        session.cached_socket_dir = directory
        return SocketResolution(directory=directory, candidates=(directory,))

    session.cached_socket_dir = None
    candidates = tuple(path.parent for path in found)
    lines = [f"Multiple {socket_filename} files found:"]
    lines.extend(f"  - {directory}" for directory in candidates)
    return SocketResolution(directory=None, error="\n".join(lines), candidates=candidates)
