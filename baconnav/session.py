"""Session state shared by every command of one baconnav process.

The resolution caches, the loaded locations and the navigation index live
here and are passed explicitly to the resolvers; nothing is kept in module
globals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import BaconSettings
from .gitignore import GitIgnoreEvaluator, IgnoreEvaluator
from .locations import Location, LocationStore
from .parser import PathSyntax, parse_locations
from .paths import lines_from
from .project_root import find_project_root
from .quickfix import write_errorfile
from .resolver import resolve_locations_file

logger = logging.getLogger(__name__)


@dataclass
class BaconSession:
    cwd: Path
    settings: BaconSettings = field(default_factory=BaconSettings)
    ignore_evaluator: IgnoreEvaluator = field(default_factory=GitIgnoreEvaluator)
    path_syntax: PathSyntax = field(default_factory=PathSyntax.current)
    store: LocationStore = field(default_factory=LocationStore)
    cached_locations_file: Path | None = None
    cached_socket_dir: Path | None = None

    def project_root(self) -> Path:
        return find_project_root(self.cwd)


@dataclass(frozen=True)
class LoadReport:
    path: Path | None
    locations: tuple[Location, ...] = ()
    warnings: tuple[str, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def load_locations(session: BaconSession) -> LoadReport:
    """Resolve, read and parse the locations file into ``session.store``.

    The previous selection is kept when the same position is still listed.
    On failure the store is left untouched.
    """
    resolution = resolve_locations_file(session)
    if resolution.path is None:
        return LoadReport(path=None, error=resolution.error)

    base_dir = resolution.base_dir if resolution.base_dir is not None else resolution.path.parent
    try:
        raw_lines = lines_from(resolution.path)
    except OSError as exc:
        return LoadReport(path=resolution.path, error=f"Failed to read {resolution.path}: {exc}")

    locations = parse_locations(raw_lines, base_dir, session.path_syntax)
    session.store.reload(locations)
    logger.debug("loaded %d location(s) from %s", len(locations), resolution.path)

    warnings = list(resolution.warnings)
    if session.settings.quickfix_enabled:
        quickfix_path = base_dir / session.settings.quickfix_path
        error = write_errorfile(quickfix_path, locations)
        if error is not None:
            warnings.append(error)

    return LoadReport(
        path=resolution.path,
        locations=locations,
        warnings=tuple(warnings),
    )
