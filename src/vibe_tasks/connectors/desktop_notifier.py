# src/vibe_tasks/connectors/desktop_notifier.py

from __future__ import annotations

import logging
import shutil
import subprocess

from ..tasks.errors import NotificationError

logger = logging.getLogger(__name__)


class DesktopNotifier:
    """
    OS notification popup through a `notify-send` compatible command.

    Called as: <command> --icon=<icon> <summary> <body>
    """

    def __init__(self, command: str = "notify-send", *, icon: str = "calendar", timeout: float = 10.0) -> None:
        self.command = command
        self.icon = icon
        self.timeout = timeout

    def is_available(self) -> bool:
        return shutil.which(self.command) is not None

    def notify(self, *, summary: str, body: str) -> None:
        cmd = [self.command, f"--icon={self.icon}", summary, body]
        try:
            subprocess.run(cmd, check=True, capture_output=True, timeout=self.timeout)
        except FileNotFoundError as e:
            raise NotificationError(f"notification command not found: {self.command}") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode("utf-8", "replace").strip()
            raise NotificationError(f"{self.command} exited with {e.returncode}: {stderr}") from e
        except subprocess.TimeoutExpired as e:
            raise NotificationError(f"{self.command} timed out after {self.timeout}s") from e
        except OSError as e:
            raise NotificationError(f"cannot run {self.command}: {e}") from e
        logger.debug("Desktop notification sent: %s", body)
