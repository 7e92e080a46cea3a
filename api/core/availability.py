"""
Block until the contacts service answers its health check.

Used by CI and container start scripts before running tests against a freshly
started service:

    PORT=8080 contacts-wait-until-available
"""

from __future__ import annotations

import asyncio
import logging
import sys
import time

import httpx

from core import settings
from core.log import configure_logging

logger = logging.getLogger(__name__)


async def wait_until_available(
    base_url: str,
    *,
    interval_s: float = 5.0,
    timeout_s: float = 300.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """
    Poll `GET /health` until it returns 200. Returns False on timeout.
    """
    deadline = time.monotonic() + timeout_s
    waited = 0.0
    async with httpx.AsyncClient(base_url=base_url, timeout=interval_s, transport=transport) as client:
        while True:
            try:
                resp = await client.get("/health")
            except httpx.HTTPError as exc:
                logger.info("service_unavailable error=%s", exc)
            else:
                logger.info("service_status status=%s", resp.status_code)
                if resp.status_code == 200:
                    return True

            if time.monotonic() + interval_s > deadline:
                return False
            waited += interval_s
            logger.info("waiting total_s=%.0f", waited)
            await asyncio.sleep(interval_s)


def main() -> int:
    configure_logging()
    base_url = f"http://localhost:{settings.port()}"
    ok = asyncio.run(
        wait_until_available(
            base_url,
            interval_s=settings.wait_interval_s(),
            timeout_s=settings.wait_timeout_s(),
        )
    )
    if not ok:
        logger.error("service_not_available base_url=%s", base_url)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
