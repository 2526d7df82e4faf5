import pytest

from server_watcher.errors import ConfigError, ProviderError
from server_watcher.providers import Scaleway, ScalewayParams

KEY = "2e7a4b9e-8a3c-4a33-9e4b-1f0c3f1d7a10"


def _offer(offer_id, *, stock="available", enable=True, name="EM-A115X-SSD"):
    return {
        "id": offer_id,
        "name": name,
        "stock": stock,
        "enable": enable,
        "memories": [{"capacity": 32_000_000_000}, {"capacity": 32_000_000_000}],
        "disks": [{"capacity": 1_000_000_000_000}],
    }


def _provider(zones=("fr-par-2", "nl-ams-1"), session=None):
    return Scaleway(ScalewayParams(KEY, zones), session=session)


def test_available_if_any_permitted_zone_has_stock():
    raw = {
        "fr-par-2": {"offers": [_offer("o1", stock="empty"), _offer("o2", enable=False)]},
        "nl-ams-1": {"offers": [_offer("o1", stock="low"), _offer("o2", stock="available", enable=False)]},
    }
    offerings = {o.id: o for o in _provider().normalize(raw)}
    assert offerings["o1"].available is True
    assert offerings["o2"].available is False
    assert offerings["o1"].label == "EM-A115X-SSD 64G 1000G"


def test_unconfigured_zones_do_not_count():
    raw = {
        "fr-par-2": {"offers": [_offer("o1", stock="empty")]},
        "pl-waw-2": {"offers": [_offer("o1", stock="available")]},
    }
    offerings = _provider(zones=("fr-par-2",)).normalize(raw)
    assert [(o.id, o.available) for o in offerings] == [("o1", False)]


def test_secret_key_must_be_uuid():
    with pytest.raises(ConfigError, match="UUID"):
        Scaleway(ScalewayParams("not-a-uuid", ("fr-par-2",)))
    with pytest.raises(ConfigError, match="SCALEWAY_SECRET_KEY"):
        Scaleway(ScalewayParams(None, ("fr-par-2",)))


def test_zones_are_required():
    with pytest.raises(ConfigError, match="SCALEWAY_BAREMETAL_ZONES"):
        Scaleway(ScalewayParams(KEY, ()))


def test_fetch_queries_each_zone(fake_session, response):
    session = fake_session(
        [
            response(json_body={"offers": [_offer("o1", stock="empty")]}),
            response(json_body={"offers": [_offer("o1")]}),
        ]
    )
    offerings = _provider(session=session).list_offerings()

    urls = [url for _, url, _ in session.calls]
    assert urls == [
        "https://api.scaleway.com/baremetal/v1/zones/fr-par-2/offers",
        "https://api.scaleway.com/baremetal/v1/zones/nl-ams-1/offers",
    ]
    assert all(kwargs["headers"] == {"X-Auth-Token": KEY} for _, _, kwargs in session.calls)
    assert [(o.id, o.available) for o in offerings] == [("o1", True)]


def test_zone_failure_fails_the_listing(fake_session, response):
    session = fake_session([response(json_body={"offers": []}), response(401, text="denied")])
    with pytest.raises(ProviderError, match="scaleway"):
        _provider(session=session).list_offerings()
