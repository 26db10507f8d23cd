"""Protean Engine runner for the storefront domain.

With PROTEAN_ENV=production, events are processed asynchronously: the Engine
runs post-commit handlers (order notifications, cart clearing, notification
dispatch) off the request path.

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from storefront.domain import storefront
    from storefront.utils.logging import configure_logging

    configure_logging()
    storefront.init()
    await Engine(storefront).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
