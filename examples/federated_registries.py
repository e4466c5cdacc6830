"""
Example: route queries across an internal and a public registry.

Requests mentioning ``secret`` only reach the internal registry, and any
``some.*`` extension coming from a registry other than the internal one is
dropped from the merged result.
"""

from __future__ import annotations

import asyncio
import logging

from smartregistry import RegistryRouter
from smartregistry.clients import InMemoryRegistryClient, client_resolver

CONFIG = {
    "registries": {
        "internal": "https://internal.example/",
        "public": "https://public.example/",
    },
    "use": ["internal", "public"],
    "filters": {
        "requests": [{"ifRequestContains": r"\bsecret\b", "use": "internal"}],
        "results": [{"ifExtensionIdMatches": r"^some\.", "use": "internal"}],
    },
}

CLIENTS = {
    "https://internal.example/": InMemoryRegistryClient(
        ["some.a@1.0.0", "secret.x"], "https://internal.example/"
    ),
    "https://public.example/": InMemoryRegistryClient(
        ["some.a@2.0.0", "other.e", "secret.w"], "https://public.example/"
    ),
}


async def main() -> None:
    router = await RegistryRouter.from_config(CONFIG, client_resolver(CLIENTS))
    for namespace in ("some", "secret", "other"):
        result = await router.query({"namespaceName": namespace})
        print(namespace, [ext.versioned_id for ext in result.extensions])


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
