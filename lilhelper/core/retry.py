# lilhelper/core/retry.py
from __future__ import annotations
import asyncio, logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")

@dataclass(frozen=True)
class RetryPolicy:
    """
    Politique de retry partagée (logs de clan, prix du marché, envois Discord).
    L'annulation de la tâche (CancelledError) n'est jamais interceptée: elle coupe
    aussi le backoff en cours.
    """
    attempts: int = 3
    initial_delay: float = 1.0
    multiplier: float = 2.0
    linear: bool = False

    def delay(self, attempt: int) -> float:
        """Attente après l'échec n° attempt (1-based)."""
        if self.linear:
            return self.initial_delay * attempt
        return self.initial_delay * (self.multiplier ** (attempt - 1))

    async def run(self, fn: Callable[[], Awaitable[T]], *,
                  retry_on: tuple[type[BaseException], ...] = (Exception,),
                  label: str = "retry") -> T:
        last: BaseException | None = None
        for attempt in range(1, self.attempts + 1):
            try:
                return await fn()
            except retry_on as e:
                last = e
                log.warning("[%s] attempt %d/%d failed: %s", label, attempt, self.attempts, e)
                if attempt < self.attempts:
                    await asyncio.sleep(self.delay(attempt))
        assert last is not None
        raise last

# 3 tentatives, 1s puis 2s
DEFAULT_POLICY = RetryPolicy()
