from chatwordle.services.scheduler import SocketIOScheduler


class InlineSocketIO:
    """Records requested sleeps; background tasks are captured and run by the test."""

    def __init__(self, on_sleep=None):
        self.sleeps = []
        self.on_sleep = on_sleep
        self.tasks = []

    def start_background_task(self, target, *args, **kwargs):
        self.tasks.append(target)

    def run_tasks(self):
        for task in self.tasks:
            task()

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        if self.on_sleep:
            self.on_sleep()


def test_call_later_runs_after_delay():
    socketio = InlineSocketIO()
    calls = []

    handle = SocketIOScheduler(socketio).call_later(1.5, lambda: calls.append('fired'), name='summary')
    socketio.run_tasks()

    assert calls == ['fired']
    assert sum(socketio.sleeps) == 1.5
    assert max(socketio.sleeps) <= 0.25
    assert handle.name == 'summary'


def test_cancelled_timer_stops_sleeping_within_one_slice():
    holder = {}
    socketio = InlineSocketIO(on_sleep=lambda: holder['handle'].cancel())
    calls = []

    holder['handle'] = SocketIOScheduler(socketio).call_later(3, lambda: calls.append('notice'))
    socketio.run_tasks()

    assert calls == []
    assert socketio.sleeps == [0.25]


def test_cancelled_before_start_never_sleeps():
    socketio = InlineSocketIO()
    calls = []

    handle = SocketIOScheduler(socketio).call_later(0.25, lambda: calls.append('cooldown'))
    handle.cancel()
    socketio.run_tasks()

    assert calls == []
    assert socketio.sleeps == []


def test_call_every_repeats_until_cancelled():
    holder = {'calls': 0}
    socketio = InlineSocketIO()
    scheduler = SocketIOScheduler(socketio, poll_interval=1)

    def tick():
        holder['calls'] += 1
        if holder['calls'] == 3:
            holder['handle'].cancel()

    holder['handle'] = scheduler.call_every(1, tick, name='countdown')
    socketio.run_tasks()

    assert holder['calls'] == 3
    assert socketio.sleeps == [1, 1, 1]


def test_callback_errors_are_contained():
    socketio = InlineSocketIO()

    def boom():
        raise RuntimeError('boom')

    SocketIOScheduler(socketio).call_later(0, boom)
    socketio.run_tasks()

    assert socketio.sleeps == [0]
