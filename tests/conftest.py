"""Shared pytest fixtures for sitebox tests."""

from pathlib import Path

import pytest

from sitebox.config import Config
from sitebox.sites import SiteRegistry
from sitebox.wizard import Prompter


class ScriptedPrompter(Prompter):
    """Answers wizard questions from a queue keyed by prompt message.

    Each entry in ``answers`` is a list consumed in order, so a message
    can be answered several times (for re-prompts). ``None`` in the queue
    accepts the default. An exception instance in the queue is raised.
    """

    def __init__(self, answers: dict):
        self.answers = {k: list(v) for k, v in answers.items()}
        self.asked: list[str] = []
        self.defaults: dict = {}
        self.errors: list[str] = []

    def _next(self, message, default):
        self.asked.append(message)
        self.defaults[message] = default
        queue = self.answers.get(message)
        if not queue:
            raise AssertionError(f"Unexpected prompt: {message}")
        answer = queue.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return default if answer is None else answer

    def ask_input(self, message, default=None):
        answer = self._next(message, default)
        return "" if answer is None else answer

    def ask_list(self, message, choices, default=None):
        answer = self._next(message, default)
        assert answer in [value for value, _label in choices]
        return answer

    def ask_confirm(self, message, default=False):
        return self._next(message, default)

    def show_error(self, message):
        self.errors.append(message)


class FakeStack:
    def __init__(self, running: bool = True, fail_reload: Exception = None):
        self.running = running
        self.fail_reload = fail_reload
        self.reloads = 0

    def is_running(self) -> bool:
        return self.running

    def reload(self) -> None:
        if self.fail_reload:
            raise self.fail_reload
        self.reloads += 1


class RecordingRegistry(SiteRegistry):
    """SiteRegistry that records which provisioning path was taken."""

    def __init__(self, sites_directory: Path):
        super().__init__(sites_directory)
        self.calls: list[tuple] = []

    def create_site(self, name, spec):
        self.calls.append(("create_site", name, spec))
        return super().create_site(name, spec)

    def update_sites_nginx_config(self, name, spec):
        self.calls.append(("update_sites_nginx_config", name, spec))
        return super().update_sites_nginx_config(name, spec)


@pytest.fixture
def sites_dir(tmp_path: Path) -> Path:
    path = tmp_path / "Sites"
    path.mkdir()
    return path


@pytest.fixture
def config(sites_dir: Path) -> Config:
    config = Config()
    config.sites_directory = sites_dir
    return config


@pytest.fixture
def registry(sites_dir: Path) -> RecordingRegistry:
    return RecordingRegistry(sites_dir)


@pytest.fixture
def stack() -> FakeStack:
    return FakeStack()


@pytest.fixture
def scripted():
    """Factory for ScriptedPrompter."""
    return ScriptedPrompter


@pytest.fixture
def make_stack():
    """Factory for FakeStack."""
    return FakeStack
