"""Serving stack (nginx, PHP-FPM, proxy) control via docker compose."""

from __future__ import annotations

import logging
import subprocess

from sitebox.config import Config

logger = logging.getLogger(__name__)

STATUS_TIMEOUT = 30
RELOAD_TIMEOUT = 120


class StackError(Exception):
    """Serving stack operation error."""
    pass


class StackManager:
    """Checks and reloads the docker compose project that serves the sites."""

    def __init__(self, config: Config):
        self.config = config

    def _compose_cmd(self, *args: str) -> list[str]:
        cmd = ["docker", "compose"]
        if self.config.stack.compose_file:
            cmd += ["-f", self.config.stack.compose_file]
        cmd += ["-p", self.config.stack.project]
        return cmd + list(args)

    def is_running(self) -> bool:
        """Return True if at least one container of the project is up."""
        cmd = self._compose_cmd("ps", "-q")
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=STATUS_TIMEOUT,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Timed out checking stack status: %s", " ".join(cmd))
            return False
        except OSError as e:
            # docker binary not found or not executable
            logger.debug("Could not run %s: %s", cmd[0], e)
            return False
        if result.returncode != 0:
            logger.debug("Stack status check failed: %s", result.stderr.strip())
            return False
        return bool(result.stdout.strip())

    def reload(self) -> None:
        """Restart the serving services so they pick up new site config."""
        cmd = self._compose_cmd("restart", *self.config.stack.reload_services)
        logger.info("Reloading stack: %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=RELOAD_TIMEOUT,
            )
        except subprocess.TimeoutExpired as e:
            raise StackError(f"Timed out reloading the stack after {RELOAD_TIMEOUT}s") from e
        except OSError as e:
            raise StackError(f"Could not run docker compose: {e}") from e
        if result.returncode != 0:
            stderr = result.stderr.strip()
            last_line = stderr.splitlines()[-1] if stderr else "no output"
            raise StackError(f"Stack reload failed (exit {result.returncode}): {last_line}")
