"""Sorteio animado.

O "giro" é uma máquina de estados IDLE -> SELECTING -> SETTLED dirigida por um
scheduler injetado (``call_later(delay_ms, callback)``):

- ``k`` quadros intermediários, ``k`` uniforme em [MIN_FRAMES, MAX_FRAMES];
- um quadro a cada ``interval_ms``, cada um mostrando um item aleatório;
- no k-ésimo tick um sorteio final independente define o resultado.

``SleepScheduler`` usa o relógio de verdade (Streamlit / CLI);
``ManualScheduler`` avança um relógio falso (testes).
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, List, Optional, Sequence
import heapq
import itertools
import logging
import random
import time

from picker_errors import EmptyCollectionError, SelectorBusyError
from item_store import Item
from picker_settings import FRAME_INTERVAL_MS, MAX_FRAMES, MIN_FRAMES

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------------------
# Schedulers
# --------------------------------------------------------------------------------------
class _TimerQueue(ABC):
    """Fila de timers ordenada por instante (ms); empates saem na ordem de agendamento."""

    def __init__(self):
        self._heap = []
        self._seq = itertools.count()

    @abstractmethod
    def now(self) -> float:
        """Instante atual em ms."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> None:
        due = self.now() + max(0.0, float(delay_ms))
        heapq.heappush(self._heap, (due, next(self._seq), callback))

    @property
    def pending(self) -> int:
        return len(self._heap)

    def _pop_due(self, until: float):
        if self._heap and self._heap[0][0] <= until:
            return heapq.heappop(self._heap)
        return None


class ManualScheduler(_TimerQueue):
    """Relógio falso: só anda quando o teste chama advance()."""

    def __init__(self):
        super().__init__()
        self._now = 0.0

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> None:
        target = self._now + ms
        while True:
            entry = self._pop_due(target)
            if entry is None:
                break
            due, _, callback = entry
            self._now = due
            callback()
        self._now = target

    def run_until_idle(self) -> None:
        while self._heap:
            self.advance(self._heap[0][0] - self._now)


class SleepScheduler(_TimerQueue):
    """Relógio real; run_until_idle() bloqueia até não sobrar timer."""

    def __init__(self, sleep: Callable[[float], None] = time.sleep, clock: Callable[[], float] = time.monotonic):
        super().__init__()
        self._sleep = sleep
        self._clock = clock

    def now(self) -> float:
        return self._clock() * 1000.0

    def run_until_idle(self) -> None:
        while self._heap:
            wait_ms = self._heap[0][0] - self.now()
            if wait_ms > 0:
                self._sleep(wait_ms / 1000.0)
            entry = self._pop_due(float("inf"))
            entry[2]()


# --------------------------------------------------------------------------------------
# Máquina de estados
# --------------------------------------------------------------------------------------
class SelectorState(str, Enum):
    IDLE = "idle"
    SELECTING = "selecting"
    SETTLED = "settled"


class AnimatedPick:
    def __init__(self, items: Sequence[Item], total_frames: int):
        self.items: List[Item] = list(items)
        self.total_frames = total_frames
        self.frame_index = 0
        self.state = SelectorState.SELECTING
        self.displayed: Optional[Item] = None
        self.result: Optional[Item] = None
        self.frames: List[Item] = []

    @property
    def settled(self) -> bool:
        return self.state is SelectorState.SETTLED

    def _show(self, item: Item) -> None:
        self.frames.append(item)
        self.frame_index += 1
        self.displayed = item

    def _settle(self, item: Item) -> None:
        self.displayed = item
        self.result = item
        self.state = SelectorState.SETTLED

    def __repr__(self) -> str:
        return (f"AnimatedPick(state={self.state.value}, frame={self.frame_index}/{self.total_frames}, "
                f"result={self.result.name if self.result else None})")


class RandomSelector:
    def __init__(
        self,
        scheduler: _TimerQueue,
        rng: Optional[random.Random] = None,
        interval_ms: float = FRAME_INTERVAL_MS,
        min_frames: int = MIN_FRAMES,
        max_frames: int = MAX_FRAMES,
    ):
        if min_frames < 1 or max_frames < min_frames:
            raise ValueError(f"Faixa de quadros inválida: {min_frames}..{max_frames}")
        self.scheduler = scheduler
        self.rng = rng or random.Random()
        self.interval_ms = interval_ms
        self.min_frames = min_frames
        self.max_frames = max_frames
        self._current: Optional[AnimatedPick] = None
        self._last: Optional[AnimatedPick] = None

    @property
    def busy(self) -> bool:
        return self._current is not None

    @property
    def state(self) -> SelectorState:
        if self._current is not None:
            return SelectorState.SELECTING
        if self._last is not None and self._last.settled:
            return SelectorState.SETTLED
        return SelectorState.IDLE

    @property
    def last_pick(self) -> Optional[AnimatedPick]:
        return self._last

    def select(
        self,
        items: Sequence[Item],
        on_frame: Optional[Callable[[AnimatedPick], None]] = None,
        on_settle: Optional[Callable[[AnimatedPick], None]] = None,
    ) -> AnimatedPick:
        if self.busy:
            raise SelectorBusyError("Já existe um sorteio em andamento.")
        if not items:
            raise EmptyCollectionError("Nenhum item disponível para sortear.")

        pick = AnimatedPick(items, total_frames=self.rng.randint(self.min_frames, self.max_frames))
        self._current = pick
        self._last = pick
        logger.debug(f"Sorteio iniciado: {len(pick.items)} itens, {pick.total_frames} quadros")
        self.scheduler.call_later(self.interval_ms, lambda: self._tick(pick, on_frame, on_settle))
        return pick

    def _tick(self, pick: AnimatedPick, on_frame, on_settle) -> None:
        if pick is not self._current:
            return  # abandonado

        pick._show(self.rng.choice(pick.items))
        if on_frame is not None:
            on_frame(pick)

        if pick.frame_index < pick.total_frames:
            self.scheduler.call_later(self.interval_ms, lambda: self._tick(pick, on_frame, on_settle))
            return

        # sorteio final independente do último quadro
        pick._settle(self.rng.choice(pick.items))
        self._current = None
        logger.info(f"Sorteio concluído: {pick.result.name} ({pick.result.id})")
        if on_settle is not None:
            on_settle(pick)

    def abandon(self) -> None:
        """Descarta o giro em andamento (só no teardown da UI)."""
        if self._current is not None:
            logger.debug("Sorteio em andamento descartado")
            self._current = None
