"""Pytest configuration and shared fixtures."""
import pytest
from helpers import FakeProvider, OtherFakeProvider

from chait.llm import ProviderRegistry
from chait.session import SessionController
from chait.settings import SettingsStore


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the real config file and API keys."""
    monkeypatch.setenv("CHAIT_CONFIG", str(tmp_path / "chait-config.json"))
    for var in ("DEEPSEEK_API_KEY", "OPENAI_API_KEY", "XAI_API_KEY"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def settings_store(tmp_path):
    """Settings store writing to a temporary config file."""
    return SettingsStore(tmp_path / "config.json")


@pytest.fixture
def fake_provider():
    """Ready provider replying "Hello, world" in three chunks."""
    return FakeProvider(chunks=["Hel", "lo, ", "world"], api_key="test-key")


@pytest.fixture
def registry(fake_provider, settings_store):
    return ProviderRegistry([fake_provider, OtherFakeProvider()], active="fake", store=settings_store)


@pytest.fixture
def controller(registry):
    """Started session controller, 40 columns by 12 rows."""
    session = SessionController(registry, width=40, height=12)
    session.start()
    return session


@pytest.fixture
def make_controller(settings_store):
    """Build a started controller around the given providers."""
    def _make(*providers, width: int = 40, height: int = 12) -> SessionController:
        session = SessionController(
            ProviderRegistry(list(providers), store=settings_store), width=width, height=height
        )
        session.start()
        return session
    return _make
