"""Routing, filtering and merge order across an internal and a public registry."""

import json

import pytest

from conftest import SCENARIO_CONFIG, build_router, ids, make_clients, versioned_ids
from smartregistry import QueryOptions, RegistryRouter, UnknownConditionsError, default_rules
from smartregistry.clients import InMemoryRegistryClient, client_resolver


@pytest.mark.asyncio
async def test_query_agglomeration():
    router = await build_router()
    result = await router.query({"namespaceName": "other"})
    # internal first, then public
    assert ids(result) == ["other.d", "other.e"]


@pytest.mark.asyncio
async def test_query_request_filtering():
    router = await build_router()
    result = await router.query({"namespaceName": "secret"})
    # secret.w from public must not be returned
    assert ids(result) == ["secret.x", "secret.y", "secret.z"]


@pytest.mark.asyncio
async def test_query_result_filtering():
    router = await build_router()
    result = await router.query({"namespaceName": "some"})
    assert versioned_ids(result) == ["some.a@1.0.0"]


@pytest.mark.asyncio
async def test_query_full_stop():
    router = await build_router()
    result = await router.query({"extensionId": "testFullStop.c"})
    assert result.extensions == []


@pytest.mark.asyncio
async def test_search_agglomeration():
    router = await build_router()
    result = await router.search({"query": "other."})
    assert ids(result) == ["other.d", "other.e"]
    assert result.offset == 0


@pytest.mark.asyncio
async def test_search_request_filtering():
    router = await build_router()
    result = await router.search({"query": "secret."})
    assert ids(result) == ["secret.x", "secret.y", "secret.z"]


@pytest.mark.asyncio
async def test_search_result_filtering():
    router = await build_router()
    result = await router.search({"query": "some."})
    assert versioned_ids(result) == ["some.a@1.0.0"]


@pytest.mark.asyncio
async def test_search_full_stop():
    router = await build_router()
    result = await router.search({"query": "testFullStop.c"})
    assert len(result.extensions) == 0


@pytest.mark.asyncio
async def test_config_unknown_conditions():
    config = {
        "use": "not relevant",
        "filters": {
            "requests": [
                {
                    "ifRequestContains": ".*",
                    "unknownCondition": "should crash",
                    "use": ["internal", "public"],
                }
            ]
        },
    }
    with pytest.raises(UnknownConditionsError, match=r"^unknown conditions:") as excinfo:
        await RegistryRouter.from_config(config, client_resolver({}), default_rules())
    assert excinfo.value.keys == ("unknownCondition",)


@pytest.mark.asyncio
async def test_router_without_filters_merges_everything():
    clients = {
        "a": InMemoryRegistryClient(["x.one", "x.two"]),
        "b": InMemoryRegistryClient(["x.three"]),
    }
    router = await RegistryRouter.from_config({"use": ["a", "b"]}, client_resolver(clients))
    result = await router.query({"namespaceName": "x"})
    assert ids(result) == ["x.one", "x.two", "x.three"]


@pytest.mark.asyncio
async def test_router_accepts_option_models_and_json_config():
    router = await RegistryRouter.from_config(
        json.dumps(SCENARIO_CONFIG), client_resolver(make_clients())
    )
    result = await router.query(QueryOptions(namespace_name="other"))
    assert ids(result) == ["other.d", "other.e"]
