"""
Rotating hero presenter.

HeroState is either empty (no presentable slides) or showing exactly one slide
at current_index. reduce_hero() implements the transitions; HeroPresenter owns
a state plus the recurring auto-advance timer, which only runs while there is
more than one slide and is released exactly once on teardown.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Hashable, Iterable, List, Optional, Tuple, Union

from portfolio_console.runtime_config import DEFAULT_HERO_INTERVAL
from portfolio_console.views.scheduler import Scheduler, TimerHandle
from portfolio_console.views.slides import Slide, valid_slides

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeroState:
    slides: Tuple[Slide, ...] = ()
    current_index: int = 0
    identity: Optional[Hashable] = None

    @property
    def is_empty(self) -> bool:
        return not self.slides

    @property
    def current(self) -> Optional[Slide]:
        if self.is_empty:
            return None
        return self.slides[self.current_index]


# Events
@dataclass(frozen=True)
class SlidesResolved:
    """New slide data arrived. identity names the subject the slides belong to."""

    slides: Tuple[Slide, ...]
    identity: Optional[Hashable] = None


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Next:
    pass


@dataclass(frozen=True)
class Previous:
    pass


@dataclass(frozen=True)
class JumpTo:
    index: int


HeroEvent = Union[SlidesResolved, Tick, Next, Previous, JumpTo]


def _sequence_identity(
    slides: Tuple[Slide, ...], identity: Optional[Hashable]
) -> Hashable:
    # Without an explicit subject key the slide content itself is the identity
    return identity if identity is not None else slides


def reduce_hero(state: HeroState, event: HeroEvent) -> HeroState:
    """Apply one hero event and return the resulting state."""
    count = len(state.slides)
    match event:
        case SlidesResolved(slides=slides, identity=identity):
            slides = tuple(valid_slides(slides))
            if not slides:
                return HeroState(identity=identity)
            changed = _sequence_identity(slides, identity) != _sequence_identity(
                state.slides, state.identity
            )
            index = state.current_index
            if changed or index >= len(slides):
                index = 0
            return HeroState(slides=slides, current_index=index, identity=identity)
        case Tick() | Next():
            if count == 0:
                return state
            return replace(state, current_index=(state.current_index + 1) % count)
        case Previous():
            if count == 0:
                return state
            return replace(
                state, current_index=(state.current_index - 1 + count) % count
            )
        case JumpTo(index=index):
            if not 0 <= index < count or index == state.current_index:
                return state
            return replace(state, current_index=index)
        case _:
            return state


class HeroPresenter:
    """Owns a HeroState and the auto-advance timer."""

    def __init__(
        self,
        scheduler: Scheduler,
        interval: float = DEFAULT_HERO_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._scheduler = scheduler
        self._interval = interval
        self._state = HeroState()
        self._timer: Optional[TimerHandle] = None
        self._timer_slide_count = 0
        self._torn_down = False
        self._observers: List[Callable[[HeroState], None]] = []

    @property
    def state(self) -> HeroState:
        return self._state

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def current_slide(self) -> Optional[Slide]:
        return self._state.current

    @property
    def timer_active(self) -> bool:
        return self._timer is not None

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    def subscribe(self, observer: Callable[[HeroState], None]) -> None:
        self._observers.append(observer)

    def dispatch(self, event: HeroEvent) -> HeroState:
        if self._torn_down:
            logger.debug("Ignoring %r after teardown", event)
            return self._state
        new_state = reduce_hero(self._state, event)
        if new_state != self._state:
            self._state = new_state
            for observer in list(self._observers):
                observer(new_state)
        self._sync_timer()
        return self._state

    def set_slides(
        self, slides: Iterable[Slide], identity: Optional[Hashable] = None
    ) -> None:
        self.dispatch(SlidesResolved(tuple(slides), identity))

    def next(self) -> None:
        self.dispatch(Next())

    def previous(self) -> None:
        self.dispatch(Previous())

    def jump(self, index: int) -> None:
        self.dispatch(JumpTo(index))

    def _on_tick(self) -> None:
        if self._torn_down or self._timer is None:
            return
        self.dispatch(Tick())

    def _sync_timer(self) -> None:
        count = len(self._state.slides)
        wants_timer = count > 1
        if wants_timer and self._timer is not None and count != self._timer_slide_count:
            # Restart the interval whenever the number of slides changes
            self._cancel_timer()
        if wants_timer and self._timer is None:
            self._timer = self._scheduler.schedule_interval(
                self._interval, self._on_tick
            )
            self._timer_slide_count = count
            logger.debug("Hero auto-advance started (%d slides)", count)
        elif not wants_timer and self._timer is not None:
            self._cancel_timer()

    def _cancel_timer(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            logger.debug("Hero auto-advance stopped")

    def teardown(self) -> None:
        """Release the timer. Safe to call more than once; only the first call acts."""
        if self._torn_down:
            return
        self._torn_down = True
        self._cancel_timer()
        self._observers.clear()
