"""Join-all-settle over independent awaitables."""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Iterable


@dataclass
class Outcome:
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def settle_all(aws: Iterable[Awaitable]) -> list[Outcome]:
    """Run all awaitables concurrently and wait for every one of them.

    A failure never cancels the siblings; outcomes keep submission order.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    outcomes = []
    for result in results:
        if isinstance(result, BaseException):
            outcomes.append(Outcome(error=result))
        else:
            outcomes.append(Outcome(value=result))
    return outcomes
