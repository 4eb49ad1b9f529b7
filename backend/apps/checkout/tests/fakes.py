class FakeHandle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose callbacks only run when the test fires them."""

    def __init__(self):
        self.handles = []

    def call_later(self, delay, callback):
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def live(self):
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def fire(self, handle):
        handle.fired = True
        handle.callback()

    def advance(self, ticks=1):
        for _ in range(ticks):
            live = self.live
            if not live:
                return
            self.fire(live[0])
