"""Resolution of the ``.bacon-locations`` file to load.

Order of preference:

1. the cached file from the previous resolution, if it still exists;
2. a downward search from the project root, preferring files that sit next
   to a live bacon socket;
3. an upward search from the working directory.

Several sub-projects may each run their own bacon, so the downward search can
return more than one file. A socket beside a locations file is the strongest
hint that it belongs to the running instance; without one the first match is
used and the choice is reported as a warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .paths import file_exists, split_path
from .search import find_files_recursive
from .socket_dir import has_socket_file

if TYPE_CHECKING:
    from .session import BaconSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationsResolution:
    path: Path | None
    base_dir: Path | None = None
    warnings: tuple[str, ...] = ()
    candidates: tuple[Path, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.path is not None


def _warning(header: str, candidates: list[Path]) -> str:
    lines = [f"Warning: {header} Using the first one. Found:"]
    lines.extend(f"  - {path}" for path in candidates)
    return "\n".join(lines)


def _select_downward(found: list[Path], filename: str, socket_filename: str) -> tuple[Path, list[str]]:
    with_socket = [path for path in found if has_socket_file(path.parent, socket_filename)]
    if len(with_socket) == 1:
        return with_socket[0], []
    if len(with_socket) > 1:
        header = f"Multiple {filename} files with {socket_filename} found."
        return with_socket[0], [_warning(header, with_socket)]
    if len(found) == 1:
        return found[0], []
    header = f"Multiple {filename} files found but none have a {socket_filename}."
    return found[0], [_warning(header, found)]


def find_upward(start: Path, filename: str) -> Path | None:
    """Return the first ``filename`` in ``start`` or any of its ancestors."""
    current = start
    while True:
        candidate = current / filename
        if file_exists(candidate):
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def resolve_locations_file(session: BaconSession) -> LocationsResolution:
    settings = session.settings
    filename = settings.locations_filename

    cached = session.cached_locations_file
    if cached is not None and file_exists(cached):
        logger.debug("locations file cache hit: %s", cached)
        return LocationsResolution(path=cached, base_dir=cached.parent, candidates=(cached,))

    found = find_files_recursive(session.project_root(), filename, session.ignore_evaluator)
    warnings: list[str] = []
    if found:
        selected, warnings = _select_downward(found, filename, settings.socket_filename)
    else:
        logger.debug("no %s below project root, searching upward from %s", filename, session.cwd)
        selected = find_upward(session.cwd, filename)

    if selected is None:
        return LocationsResolution(path=None, error=f"No {filename} file found")

    session.cached_locations_file = selected
    base_dir, _name = split_path(selected)
    return LocationsResolution(
        path=selected,
        base_dir=base_dir,
        warnings=tuple(warnings),
        candidates=tuple(found) if found else (selected,),
    )
