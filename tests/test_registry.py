from __future__ import annotations

from pyscooters.geometry import LatLng
from pyscooters.models.provider import SchemaVersion
from pyscooters.providers import PROVIDERS, ZURICH_BBOX, resolve_providers


def test_known_providers() -> None:
    assert list(PROVIDERS) == ["bolt", "bird", "dott", "lime", "voi"]


def test_schema_versions() -> None:
    assert PROVIDERS["bolt"].schema_version is SchemaVersion.GBFS_V3
    for provider in ("bird", "dott", "lime", "voi"):
        assert PROVIDERS[provider].schema_version is SchemaVersion.GBFS_V2


def test_only_voi_is_bounded() -> None:
    assert PROVIDERS["voi"].bounding_box == ZURICH_BBOX
    assert all(d.bounding_box is None for k, d in PROVIDERS.items() if k != "voi")
    assert ZURICH_BBOX.contains(LatLng(47.376, 8.528))


def test_registry_is_read_only() -> None:
    try:
        PROVIDERS["hopp"] = PROVIDERS["voi"]  # type: ignore[index]
    except TypeError:
        pass
    else:
        raise AssertionError("registry accepted a new entry")


def test_resolve_all() -> None:
    assert [k for k, _ in resolve_providers(None)] == list(PROVIDERS)


def test_resolve_is_case_insensitive_and_keeps_registry_order() -> None:
    assert [k for k, _ in resolve_providers(["VOI", " Bird", "lime"])] == ["bird", "lime", "voi"]


def test_resolve_ignores_unknown_and_duplicates() -> None:
    assert [k for k, _ in resolve_providers(["hopp", "dott", "DOTT"])] == ["dott"]


def test_resolve_empty_selection() -> None:
    assert resolve_providers([]) == []
    assert resolve_providers(["nope"]) == []


def test_resolve_against_custom_registry(registry) -> None:
    assert [k for k, _ in resolve_providers(["beta"], registry)] == ["beta"]
