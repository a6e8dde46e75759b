import json
from unittest.mock import patch

import pytest

from bundle_keep.config import settings
from bundle_keep.core import ResourceKey
from bundle_keep.services.store import InMemoryResourceStore
from bundle_keep.transactions import BundleValidator


@pytest.fixture(autouse=True)
def _reset_services():
    settings.reset_services()
    yield
    settings.reset_services()


def test_get_services_builds_memory_backend_once():
    with patch.dict("os.environ", {"BUNDLE_STORE_BACKEND": "memory", "BUNDLE_SEARCH_TIMEOUT_S": "2.5"}):
        services = settings.get_services()
        again = settings.get_services()

    assert services is again
    assert isinstance(services["store"], InMemoryResourceStore)
    assert isinstance(services["validator"], BundleValidator)
    assert services["validator"].resolver.search_timeout_s == 2.5


def test_unsupported_store_backend_raises():
    with patch.dict("os.environ", {"BUNDLE_STORE_BACKEND": "cosmos"}):
        with pytest.raises(ValueError, match="Unsupported BUNDLE_STORE_BACKEND"):
            settings.get_services()


@pytest.mark.parametrize("raw", ["abc", "0", "-1"])
def test_invalid_search_timeout_raises(raw: str):
    with patch.dict("os.environ", {"BUNDLE_SEARCH_TIMEOUT_S": raw}):
        with pytest.raises(ValueError, match="BUNDLE_SEARCH_TIMEOUT_S"):
            settings.get_search_timeout_seconds()


@pytest.mark.asyncio
async def test_seed_store_from_env_loads_resources(tmp_path):
    seed_file = tmp_path / "seed.json"
    seed_file.write_text(
        json.dumps(
            [
                {"resourceType": "Patient", "id": "p1"},
                {"resourceType": "Organization", "id": "o1"},
            ]
        ),
        encoding="utf-8",
    )

    with patch.dict("os.environ", {"BUNDLE_STORE_SEED_PATH": str(seed_file)}):
        services = settings.get_services()
        loaded = await settings.seed_store_from_env(services)

    assert loaded == 2
    assert await services["validator"].get_latest_version_id(ResourceKey("Patient", "p1")) == "1"


@pytest.mark.asyncio
async def test_seed_store_from_env_is_noop_without_path():
    with patch.dict("os.environ", {"BUNDLE_STORE_SEED_PATH": ""}):
        assert await settings.seed_store_from_env() == 0


@pytest.mark.asyncio
async def test_seed_file_must_be_array(tmp_path):
    seed_file = tmp_path / "seed.json"
    seed_file.write_text(json.dumps({"resourceType": "Patient"}), encoding="utf-8")

    with patch.dict("os.environ", {"BUNDLE_STORE_SEED_PATH": str(seed_file)}):
        with pytest.raises(ValueError, match="JSON array"):
            await settings.seed_store_from_env(settings.get_services())
