"""Shared pytest configuration and fixtures for the Cachet client."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable

import pytest

from tests.helpers import FakeCachetServer

from cachet.client import Client

LOGS_ROOT = Path(__file__).resolve().parents[1] / "logs" / "tests"
SESSION_LOG = LOGS_ROOT / "pytest.session.log"
_MODULE_HANDLERS: Dict[str, logging.Handler] = {}

BASE_URL = "https://status.example.com"
TOKEN = "secret"


def _initialise_logging() -> None:
    LOGS_ROOT.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(SESSION_LOG, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)


def get_test_logger(module_name: str) -> logging.Logger:
    """Return a logger writing into ``logs/tests/<module>.log``."""
    normalised = module_name.replace("tests.", "")
    logger = logging.getLogger(f"tests.{normalised}")
    logger.setLevel(logging.INFO)
    if normalised not in _MODULE_HANDLERS:
        LOGS_ROOT.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(LOGS_ROOT / f"{normalised}.log", mode="a", encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        logger.addHandler(handler)
        _MODULE_HANDLERS[normalised] = handler
    return logger


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # noqa: D401 - pytest hook
    _initialise_logging()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo[None]) -> Iterable[pytest.TestReport]:
    outcome = yield
    report = outcome.get_result()
    if report.outcome != "failed":
        return
    module = getattr(item, "module", None)
    module_name = getattr(module, "__name__", "tests")
    target = LOGS_ROOT / f"{module_name.split('.')[-1]}.log"
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("a", encoding="utf-8") as handle:
        handle.write("\n=== TEST FAILURE ===\n")
        handle.write(f"nodeid: {item.nodeid}\n")
        handle.write(f"phase: {report.when}\n")
        handle.write(str(report.longrepr))
        handle.write("\n")


@pytest.fixture
def cachet_server() -> FakeCachetServer:
    return FakeCachetServer(token=TOKEN)


@pytest.fixture
def client(cachet_server: FakeCachetServer) -> Client:
    return Client(BASE_URL, token=TOKEN, session=cachet_server)


@pytest.fixture(autouse=True)
def clear_cachet_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("CACHET_CONFIG", "CACHET_URL", "CACHET_TOKEN", "CACHET_LOG_DIR"):
        monkeypatch.delenv(key, raising=False)


__all__ = [
    "BASE_URL",
    "TOKEN",
    "get_test_logger",
]
