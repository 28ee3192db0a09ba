"""
Animation Clocks and the Cooperative Scheduler

AnimationClock advances simulated time by a fixed increment per tick,
never by wall-clock delta, so the same speed and tick count always give
the same picture. GenerationClock does the same for an automaton by
stepping it once per tick.

Scheduler drives fixed-interval Timers from a single thread: the caller
feeds it elapsed milliseconds with advance(), and each timer fires
floor(accumulated / interval) times, capped per call so a long stall
cannot snowball into an unbounded catch-up burst.
"""


class AnimationClock:
    """Simulated time, gated by a play/pause flag.

    Args:
        base_step: Time added per tick at 100% speed
        playing: Start running (True) or paused
    """

    def __init__(self, base_step, playing=True):
        self.base_step = base_step
        self.playing = playing
        self.time = 0.0
        self.ticks = 0

    def tick(self, speed=100):
        """Advance by base_step * speed / 100 if playing. Returns the time."""
        if self.playing:
            self.time += self.base_step * speed / 100.0
            self.ticks += 1
        return self.time

    def toggle(self):
        self.playing = not self.playing
        return self.playing

    def reset(self):
        self.time = 0.0
        self.ticks = 0


class GenerationClock:
    """Discrete clock for an automaton: one step() per tick while playing."""

    def __init__(self, automaton, playing=False):
        self.automaton = automaton
        self.playing = playing

    @property
    def generation(self):
        return self.automaton.generation

    def tick(self):
        if self.playing:
            self.automaton.step()
        return self.automaton.generation

    def step_once(self):
        """Single manual step, only honoured while paused."""
        if not self.playing:
            self.automaton.step()
        return self.automaton.generation

    def toggle(self):
        self.playing = not self.playing
        return self.playing


class Timer:
    """Fixed-interval callback owned by a Scheduler.

    `interval` may be a number of milliseconds or a zero-argument callable
    returning one, so a live "tick interval" parameter takes effect on the
    very next advance without re-registering the timer.
    """

    def __init__(self, interval, callback, max_catchup=5):
        if not callable(interval) and interval <= 0:
            raise ValueError(f"timer interval must be positive, got {interval}")
        self._interval = interval
        self.callback = callback
        self.max_catchup = max_catchup
        self.accumulator = 0.0
        self.fired = 0
        self.active = True

    @property
    def interval(self):
        value = self._interval() if callable(self._interval) else self._interval
        return max(1e-3, float(value))

    def advance(self, dt_ms):
        """Accumulate dt_ms and fire as many whole intervals as fit.

        Returns:
            Number of times the callback ran
        """
        if not self.active:
            return 0
        self.accumulator += dt_ms
        interval = self.interval
        count = 0
        while self.accumulator >= interval and count < self.max_catchup:
            self.accumulator -= interval
            self.callback()
            count += 1
            if not self.active:
                break
        # Drop the backlog once the cap is hit
        if count >= self.max_catchup:
            self.accumulator %= interval
        self.fired += count
        return count

    def cancel(self):
        self.active = False
        self.accumulator = 0.0


class Scheduler:
    """Single-threaded owner of every Timer in a session."""

    def __init__(self):
        self.timers = []

    def every(self, interval, callback, max_catchup=5):
        timer = Timer(interval, callback, max_catchup)
        self.timers.append(timer)
        return timer

    def advance(self, dt_ms):
        """Advance all timers by dt_ms in registration order."""
        fired = 0
        for timer in list(self.timers):
            fired += timer.advance(dt_ms)
        self.timers = [t for t in self.timers if t.active]
        return fired

    def cancel(self, timer):
        timer.cancel()
        if timer in self.timers:
            self.timers.remove(timer)

    def cancel_all(self):
        for timer in self.timers:
            timer.cancel()
        self.timers = []

    def __len__(self):
        return len(self.timers)
