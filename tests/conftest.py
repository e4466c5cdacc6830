"""Two-registry scenario shared by the router tests."""

from __future__ import annotations

import pytest

from smartregistry import RegistryRouter, default_rules
from smartregistry.clients import InMemoryRegistryClient, client_resolver

REGISTRIES = {
    "internal": "https://internal.testdomain/",
    "public": "https://public.testdomain/",
}

SCENARIO_CONFIG = {
    "registries": REGISTRIES,
    "use": ["internal", "public"],
    "filters": {
        "requests": [
            {"ifRequestContains": r"\btestFullStop\b", "use": None},
            {"ifRequestContains": r"\bsecret\b", "use": "internal"},
        ],
        "results": [
            {"ifExtensionIdMatches": r"^some\.", "use": "internal"},
        ],
    },
}


def make_clients():
    return {
        REGISTRIES["internal"]: InMemoryRegistryClient(
            ["some.a@1.0.0", "other.d", "secret.x", "secret.y", "secret.z"],
            REGISTRIES["internal"],
        ),
        REGISTRIES["public"]: InMemoryRegistryClient(
            ["some.a@2.0.0", "some.b", "other.e", "testFullStop.c", "secret.w"],
            REGISTRIES["public"],
        ),
    }


async def build_router(config=None, clients=None, rules=None):
    clients = clients if clients is not None else make_clients()
    return await RegistryRouter.from_config(
        config if config is not None else SCENARIO_CONFIG,
        client_resolver(clients),
        rules if rules is not None else default_rules(),
    )


def ids(result):
    return [ext.id for ext in result.extensions]


def versioned_ids(result):
    return [ext.versioned_id for ext in result.extensions]


@pytest.fixture
def clients():
    return make_clients()
