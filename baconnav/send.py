"""Sending actions to a running bacon through its control socket.

The ``bacon --send`` client is run from the socket directory; its exit
status decides success and its output is reported verbatim on failure.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Callable

from .session import BaconSession
from .socket_dir import resolve_socket_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendOutcome:
    ok: bool
    message: str


def send_action(
    session: BaconSession,
    action: str,
    runner: Callable[..., subprocess.CompletedProcess[str]] = subprocess.run,
) -> SendOutcome:
    """Send ``action`` (e.g. ``job:test`` or ``scroll-lines(-2)``) to bacon."""
    if not action or not action.strip():
        return SendOutcome(False, "Error: No action specified for BaconSend")

    resolution = resolve_socket_dir(session)
    if resolution.directory is None:
        return SendOutcome(False, f"Error: {resolution.error}")
    socket_dir = resolution.directory

    cmd = [session.settings.bacon_command, "--send", action]
    logger.debug("running %s in %s", cmd, socket_dir)
    try:
        proc = runner(
            cmd,
            cwd=socket_dir,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        return SendOutcome(False, f"Error sending to bacon: {exc}")

    if proc.returncode == 0:
        return SendOutcome(True, f"Bacon: Sent '{action}' to {socket_dir}")

    output = (proc.stdout or "").strip()
    if not output:
        output = f"Command failed with exit code {proc.returncode}"
    return SendOutcome(False, f"Error sending to bacon: {output}")
