# lilhelper/core/scheduler.py
from __future__ import annotations
import asyncio, contextlib, logging
from datetime import datetime

from lilhelper.domain import clock

log = logging.getLogger(__name__)

class Ticker:
    """
    Boucle de fond: attente du prochain déclenchement → tick() → attente...
    stop() (ou l'annulation de la tâche) termine la boucle à n'importe quel await.
    Une erreur dans tick() est loggée; le tick suivant n'est pas affecté.
    """
    name = "ticker"

    def __init__(self) -> None:
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=self.name)

    async def stop(self) -> None:
        if not self._task:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    def next_delay(self) -> float:
        raise NotImplementedError

    async def tick(self) -> None:
        raise NotImplementedError

    async def _run(self) -> None:
        try:
            while True:
                delay = self.next_delay()
                if delay > 0:
                    await asyncio.sleep(delay)
                try:
                    await self.tick()
                except Exception:
                    log.exception("[%s] tick failed", self.name)
        except asyncio.CancelledError:
            log.info("[%s] stopping", self.name)
            raise


class IntervalTicker(Ticker):
    """Un tick immédiat au démarrage, puis toutes les `interval` secondes."""

    def __init__(self, interval: float) -> None:
        super().__init__()
        self.interval = float(interval)
        self._first = True

    def next_delay(self) -> float:
        if self._first:
            self._first = False
            return 0.0
        return self.interval


class DailyTicker(Ticker):
    """Un tick par jour à hour:minute dans le fuseau tz."""
    hour = 0
    minute = 0
    tz = clock.UTC

    def __init__(self) -> None:
        super().__init__()
        self._scheduled: datetime | None = None

    def next_fire(self, now: datetime | None = None) -> datetime:
        return clock.next_daily_at(now or datetime.now(clock.UTC), self.hour, self.minute, self.tz)

    def next_delay(self) -> float:
        now = datetime.now(clock.UTC)
        # une seule exécution par cible, même si sleep() rend la main en avance
        ref = max(now, self._scheduled) if self._scheduled else now
        nxt = self.next_fire(ref)
        self._scheduled = nxt
        wait = clock.seconds_until(nxt, now)
        log.info("[%s] next run at %s (in %.0fs)", self.name, nxt.isoformat(), wait)
        return wait
