"""Display sources: hyprctl (live) and a fixed mock desk."""

from __future__ import annotations

import json
import logging
import subprocess

from .models import Monitor, mock_monitors

log = logging.getLogger(__name__)

HYPRCTL = "hyprctl"


class Hyprctl:
    """Query Hyprland through the ``hyprctl`` command line tool."""

    def __init__(self, instance: str | int | None = None, *, timeout: float = 5.0) -> None:
        self.instance = str(instance) if instance is not None else None
        self.timeout = timeout

    def _args(self, *args: str) -> list[str]:
        cmd = [HYPRCTL]
        if self.instance is not None:
            cmd += ["-i", self.instance]
        cmd += list(args)
        return cmd

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            self._args(*args),
            capture_output=True,
            text=True,
            check=True,
            timeout=self.timeout,
        )

    def command_json(self, *args: str) -> list | dict:
        """Run a hyprctl command with ``-j`` and return parsed JSON."""
        result = self._run(*args, "-j")
        return json.loads(result.stdout)

    def get_monitors(self) -> list[Monitor]:
        """Query all connected monitors (including disabled).

        Returns an empty list when hyprctl is missing, fails, or prints
        something that isn't a list of monitor objects.
        """
        try:
            data = self.command_json("monitors", "all")
        except FileNotFoundError:
            log.warning("%s not found in PATH", HYPRCTL)
            return []
        except subprocess.CalledProcessError as e:
            log.warning("Failed to get monitors: %s", (e.stderr or "").strip() or e)
            return []
        except subprocess.TimeoutExpired:
            log.warning("%s timed out after %ss", HYPRCTL, self.timeout)
            return []
        except (OSError, json.JSONDecodeError) as e:
            log.warning("Error fetching monitors: %s", e)
            return []

        if not isinstance(data, list):
            log.warning("Unexpected monitors payload: %r", type(data).__name__)
            return []

        monitors: list[Monitor] = []
        for entry in data:
            if not isinstance(entry, dict):
                log.debug("Skipping malformed monitor entry: %r", entry)
                continue
            try:
                monitors.append(Monitor.from_hyprctl(entry))
            except (TypeError, ValueError) as e:
                log.warning("Skipping monitor %r: %s", entry.get("name"), e)
        log.info("Found %d monitor(s)", len(monitors))
        return monitors

    def has_instance(self) -> bool:
        """True if a Hyprland instance answers (or one was named explicitly).

        Part of the display-source interface; ``app.main`` checks it before
        querying monitors.
        """
        if self.instance is not None:
            return True
        try:
            self._run("monitors", "-j")
        except (OSError, subprocess.SubprocessError):
            return False
        return True


class MockSource:
    """Offline stand-in returning the built-in three-monitor desk."""

    def get_monitors(self) -> list[Monitor]:
        return mock_monitors()

    def has_instance(self) -> bool:
        return True
