"""
Timed load test against a running contacts service.

For each round size N it creates N random contacts, then updates, reads and
deletes each of them in random order, and runs N/1000 (at least one) name
prefix and birthday searches limited to 20 rows. It prints the average
duration per request in microseconds:

    PORT=8080 contacts-loadtest
    PORT=8080 LOADTEST_SIZES=100,1000 contacts-loadtest
"""

from __future__ import annotations

import asyncio
import logging
import random
import sys
import time
from dataclasses import dataclass, field

import httpx

from core import randomgen, settings
from core.log import configure_logging

logger = logging.getLogger(__name__)

COLUMNS = ("POST", "PUT", "GET", "FIRST", "LAST", "BOTH", "BIRTHDAY", "DELETE")
SEARCH_LIMIT = 20
_WIDTH = 10


class LoadTestError(RuntimeError):
    pass


@dataclass
class RoundResult:
    elements: int
    average_us: dict[str, float] = field(default_factory=dict)


class LoadTest:
    def __init__(self, client: httpx.AsyncClient, *, rng: random.Random | None = None) -> None:
        self._client = client
        self._rng = rng or random.Random()

    async def _timed(self, method: str, url: str, **kwargs) -> tuple[httpx.Response, float]:
        started = time.perf_counter()
        resp = await self._client.request(method, url, **kwargs)
        elapsed_us = (time.perf_counter() - started) * 1_000_000
        if resp.status_code >= 500:
            raise LoadTestError(f"{method} {url} failed: status={resp.status_code}")
        return resp, elapsed_us

    async def _create(self) -> tuple[int, float]:
        resp, elapsed = await self._timed("POST", "/contacts", json=randomgen.random_contact(self._rng))
        if resp.status_code != 201:
            raise LoadTestError(f"POST /contacts failed: status={resp.status_code}")
        return int(resp.json()["id"]), elapsed

    async def _each_id(self, method: str, ids: list[int], *, with_body: bool = False) -> float:
        shuffled = list(ids)
        self._rng.shuffle(shuffled)
        total = 0.0
        for contact_id in shuffled:
            kwargs = {"json": randomgen.random_contact(self._rng)} if with_body else {}
            _, elapsed = await self._timed(method, f"/contacts/{contact_id}", **kwargs)
            total += elapsed
        return total / len(shuffled)

    async def _searches(self, count: int, make_params) -> float:
        total = 0.0
        for _ in range(count):
            params = {**make_params(), "limit": SEARCH_LIMIT}
            _, elapsed = await self._timed("GET", "/contacts", params=params)
            total += elapsed
        return total / count

    def _first_prefix(self) -> dict[str, str]:
        return {"firstname": randomgen.pick_first_name(self._rng)[:3]}

    def _last_prefix(self) -> dict[str, str]:
        return {"lastname": randomgen.pick_last_name(self._rng)[:3]}

    def _both_prefixes(self) -> dict[str, str]:
        return {**self._first_prefix(), **self._last_prefix()}

    def _birthday(self) -> dict[str, str]:
        return {"birthday": f"{self._rng.randint(1, 12)}-{self._rng.randint(1, 28)}"}

    async def run_round(self, elements: int) -> RoundResult:
        result = RoundResult(elements=elements)

        ids = []
        total = 0.0
        for _ in range(elements):
            contact_id, elapsed = await self._create()
            ids.append(contact_id)
            total += elapsed
        result.average_us["POST"] = total / elements

        result.average_us["PUT"] = await self._each_id("PUT", ids, with_body=True)
        result.average_us["GET"] = await self._each_id("GET", ids)

        searches = max(elements // 1000, 1)
        result.average_us["FIRST"] = await self._searches(searches, self._first_prefix)
        result.average_us["LAST"] = await self._searches(searches, self._last_prefix)
        result.average_us["BOTH"] = await self._searches(searches, self._both_prefixes)
        result.average_us["BIRTHDAY"] = await self._searches(searches, self._birthday)

        result.average_us["DELETE"] = await self._each_id("DELETE", ids)
        logger.info("loadtest_round elements=%s", elements)
        return result


def format_header() -> str:
    header = "Elements".rjust(_WIDTH) + "".join(column.rjust(_WIDTH) for column in COLUMNS)
    return f"{header}\n{'-' * len(header)}"


def format_row(result: RoundResult) -> str:
    cells = "".join(f"{result.average_us[column]:{_WIDTH}.0f}" for column in COLUMNS)
    return f"{result.elements:{_WIDTH}d}{cells}"


async def run_load_test(
    base_url: str,
    sizes: list[int],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    rng: random.Random | None = None,
    out=None,
) -> list[RoundResult]:
    out = out or sys.stdout
    results = []
    async with httpx.AsyncClient(base_url=base_url, timeout=30.0, transport=transport) as client:
        load_test = LoadTest(client, rng=rng)
        print(format_header(), file=out)
        for elements in sizes:
            result = await load_test.run_round(elements)
            print(format_row(result), file=out)
            results.append(result)
    return results


def main() -> int:
    configure_logging()
    base_url = f"http://localhost:{settings.port()}"
    try:
        asyncio.run(run_load_test(base_url, settings.loadtest_sizes()))
    except (httpx.HTTPError, LoadTestError) as exc:
        logger.error("loadtest_failed base_url=%s error=%s", base_url, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
