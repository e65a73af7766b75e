import pytest

from treebark import logger as logger_module


class FakeClock:
    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock(monkeypatch):
    """Freeze the logger's notion of 'now'; advance it explicitly."""
    fake = FakeClock()
    monkeypatch.setattr(logger_module, "_now", fake)
    return fake


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Never read the real user's config file."""
    monkeypatch.setenv("TREEBARK_CONFIG", str(tmp_path / "config" / "config.toml"))
