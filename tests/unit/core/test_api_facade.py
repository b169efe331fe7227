import pytest

from alumlink.core.api_facade import ApiFacade
from alumlink.domain.events.api_events import ApiModeChanged, BackendHealthChecked
from alumlink.domain.models.mode import ClientMode, EffectiveMode


def make_facade(mock_api_client, real_backend, substitute_backend, use_real=False, available=False, configured=False, listener=None):
    return ApiFacade(
        mode=ClientMode(use_real=use_real, backend_available=available),
        api_client=mock_api_client,
        real=real_backend,
        substitute=substitute_backend,
        configured_use_real=configured,
        event_listener=listener,
    )


@pytest.mark.asyncio
async def test_health_check_skips_probe_when_real_api_not_requested(mock_api_client, real_backend, substitute_backend):
    facade = make_facade(mock_api_client, real_backend, substitute_backend)

    assert await facade.check_backend_health() is True
    mock_api_client.check_backend_health.assert_not_awaited()
    assert facade.is_using_mock_api


@pytest.mark.asyncio
async def test_set_api_mode_with_unreachable_backend(mock_api_client, real_backend, substitute_backend):
    mock_api_client.check_backend_health.return_value = False
    facade = make_facade(mock_api_client, real_backend, substitute_backend)

    facade.set_api_mode(True)
    healthy = await facade.check_backend_health()

    assert healthy is False
    assert facade.is_using_real_api is False
    assert facade.mode.use_real is True
    assert facade.mode.backend_available is False


@pytest.mark.asyncio
async def test_health_check_records_success(mock_api_client, real_backend, substitute_backend):
    events = []
    facade = make_facade(mock_api_client, real_backend, substitute_backend, use_real=True, listener=events.append)

    assert await facade.check_backend_health() is True
    assert facade.is_using_real_api
    assert isinstance(events[-1], BackendHealthChecked) and events[-1].healthy


@pytest.mark.asyncio
async def test_health_check_never_raises(mock_api_client, real_backend, substitute_backend):
    mock_api_client.check_backend_health.side_effect = RuntimeError("event loop closed")
    facade = make_facade(mock_api_client, real_backend, substitute_backend, use_real=True, available=True)

    assert await facade.check_backend_health() is False
    assert facade.is_using_mock_api


def test_accessors_route_by_mode(facade: ApiFacade, real_backend, substitute_backend):
    assert facade.alumni is real_backend.alumni
    assert facade.events is real_backend.events
    assert facade.donations is real_backend.donations
    assert facade.auth is real_backend.auth

    facade.set_api_mode(False)

    assert facade.alumni is substitute_backend.alumni
    assert facade.events is substitute_backend.events
    assert facade.donations is substitute_backend.donations


def test_auth_in_substitute_mode_returns_alumni_substitute(facade: ApiFacade, substitute_backend):
    facade.set_api_mode(False)
    assert facade.auth is substitute_backend.alumni


@pytest.mark.asyncio
async def test_initialize_degrades_when_probe_fails(mock_api_client, real_backend, substitute_backend):
    mock_api_client.check_backend_health.return_value = False
    facade = make_facade(mock_api_client, real_backend, substitute_backend, configured=True)

    mode = await facade.initialize()

    assert mode == EffectiveMode.SUBSTITUTE
    assert facade.mode.use_real is False


@pytest.mark.asyncio
async def test_initialize_uses_real_api_when_healthy(mock_api_client, real_backend, substitute_backend):
    facade = make_facade(mock_api_client, real_backend, substitute_backend, configured=True)

    assert await facade.initialize() == EffectiveMode.REAL
    assert facade.is_using_real_api


@pytest.mark.asyncio
async def test_initialize_without_real_api_does_not_probe(mock_api_client, real_backend, substitute_backend):
    facade = make_facade(mock_api_client, real_backend, substitute_backend)

    assert await facade.initialize() == EffectiveMode.SUBSTITUTE
    mock_api_client.check_backend_health.assert_not_awaited()


def test_fall_back_is_one_directional(facade: ApiFacade):
    facade.fall_back_to_substitute("timeouts")
    assert facade.is_using_mock_api

    facade.fall_back_to_substitute("again")
    assert facade.mode.use_real is False


def test_mode_change_event_is_dispatched(mock_api_client, real_backend, substitute_backend):
    events = []
    facade = make_facade(mock_api_client, real_backend, substitute_backend, use_real=True, available=True, listener=events.append)

    facade.fall_back_to_substitute("boom")

    assert events == [ApiModeChanged("REAL", "SUBSTITUTE", "fallback", timestamp=events[0].timestamp)]


@pytest.mark.asyncio
async def test_switch_to_real_api_requires_healthy_backend(mock_api_client, real_backend, substitute_backend):
    mock_api_client.check_backend_health.return_value = False
    facade = make_facade(mock_api_client, real_backend, substitute_backend)

    assert await facade.switch_to_real_api() is False
    assert facade.mode.use_real is False

    mock_api_client.check_backend_health.return_value = True
    assert await facade.switch_to_real_api() is True
    assert facade.is_using_real_api


def test_switch_to_mock_api_and_status(facade: ApiFacade):
    facade.switch_to_mock_api()

    assert facade.status() == {
        "mode": "SUBSTITUTE",
        "use_real_api": False,
        "backend_available": True,
        "api_url": "http://backend.test",
    }
