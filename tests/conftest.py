"""Pytest configuration and fixtures for dev-cli tests."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from devcli.config.store import ConfigStore


def pytest_sessionfinish(session, exitstatus):
    """Fail the run when --cov was requested but no data was collected."""
    cov_enabled = any("--cov" in str(arg) for arg in session.config.args)
    if not cov_enabled:
        return

    coverage_files = list(Path.cwd().glob(".coverage*"))
    if not coverage_files:
        pytest.exit(
            "Coverage was enabled but no data was collected. "
            "Check that tests import from 'devcli' (the package) not 'src/devcli' (filesystem path).",
            returncode=1,
        )


class FakeClock:
    """Settable wallclock in epoch seconds."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.reason = "Error" if status_code >= 400 else "OK"

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


class FakeSession:
    """Stand-in for ``requests.Session`` keyed by (method, url).

    A route may be a response, a list of responses served in order, or an
    exception instance to raise.
    """

    def __init__(self, routes: dict[tuple[str, str], Any] | None = None):
        self.routes: dict[tuple[str, str], Any] = dict(routes or {})
        self.calls: list[dict[str, Any]] = []
        self.closed = 0

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        key = (method, url)
        if key not in self.routes:
            raise AssertionError(f"unexpected request: {method} {url}")
        route = self.routes[key]
        if isinstance(route, list):
            route = route.pop(0)
        if isinstance(route, Exception):
            raise route
        return route

    def close(self) -> None:
        self.closed += 1

    def urls(self, method: str | None = None) -> list[str]:
        return [c["url"] for c in self.calls if method is None or c["method"] == method]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(tmp_path: Path, clock: FakeClock) -> ConfigStore:
    return ConfigStore(tmp_path / "project" / ".dev_cli", tmp_path / "home" / ".dev_cli", clock=clock)


@pytest.fixture
def fake_response() -> type[FakeResponse]:
    return FakeResponse


@pytest.fixture
def fake_session() -> type[FakeSession]:
    return FakeSession
