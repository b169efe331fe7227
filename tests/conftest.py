import pytest
from typer.testing import CliRunner
from unittest.mock import MagicMock

from alumlink.core.api_facade import ApiFacade
from alumlink.domain.interfaces.user_interface import UserInterface
from alumlink.domain.models.mode import ClientMode
from alumlink.infrastructure.cache.caching_service import ResponseCache
from alumlink.infrastructure.config.settings import clear_test_config, reset_configuration
from alumlink.infrastructure.resilience.api_retry import ResilienceController
from alumlink.infrastructure.services.http_services import RealBackend
from alumlink.infrastructure.services.substitute import SubstituteBackend


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


class RecordingSleep:
    """Awaitable sleep stand-in that records requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keeps tests away from the developer's real configuration."""
    for name in (
        "ALUMLINK_API_URL", "ALUMLINK_USE_REAL_API", "ALUMLINK_BACKEND_AVAILABLE",
        "ALUMLINK_PUBLISHABLE_KEY", "ALUMLINK_ENV", "ALUMLINK_REQUEST_TIMEOUT",
        "ALUMLINK_SESSION_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_configuration()
    clear_test_config()
    yield
    clear_test_config()
    reset_configuration()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def cache(clock):
    return ResponseCache(clock=clock)


@pytest.fixture
def mock_ui():
    return MagicMock(spec=UserInterface)


@pytest.fixture
def mock_api_client(mocker):
    """ApiClient stand-in whose async methods are AsyncMocks."""
    client = MagicMock()
    client.base_url = "http://backend.test"
    client.check_backend_health = mocker.AsyncMock(return_value=True)
    client.get = mocker.AsyncMock()
    client.aclose = mocker.AsyncMock()
    return client


@pytest.fixture
def real_backend(mocker):
    """Real-backend bundle with every service method mocked."""
    backend = MagicMock(spec=RealBackend)
    for name in ("alumni", "events", "donations", "auth", "upload"):
        setattr(backend, name, mocker.AsyncMock())
    return backend


@pytest.fixture
def substitute_backend():
    return SubstituteBackend.create()


@pytest.fixture
def facade(mock_api_client, real_backend, substitute_backend):
    return ApiFacade(
        mode=ClientMode(use_real=True, backend_available=True),
        api_client=mock_api_client,
        real=real_backend,
        substitute=substitute_backend,
        configured_use_real=True,
    )


@pytest.fixture
def controller(cache, facade, recording_sleep):
    return ResilienceController(cache_service=cache, mode_controller=facade, sleep=recording_sleep)
