import asyncio
import threading

from lanshare.bridge.events import STATUS_UPDATED, EventChannel
from lanshare.ui.loop_thread import LoopThread


def test_submitted_coroutines_run_on_the_loop_thread():
    runner = LoopThread()
    runner.start_and_wait()

    async def where():
        await asyncio.sleep(0)
        return threading.current_thread()

    try:
        assert runner.submit(where()).result(timeout=2) is runner
    finally:
        runner.stop()
        runner.join(timeout=2)

    assert not runner.is_alive()


def test_bridge_events_are_marshalled_onto_the_loop():
    runner = LoopThread()
    runner.start_and_wait()
    channel = EventChannel()
    channel.attach_loop(runner.loop)
    seen = []
    done = threading.Event()

    def on_status(event):
        seen.append((event.payload, threading.current_thread()))
        if len(seen) == 2:
            done.set()

    channel.subscribe(STATUS_UPDATED, on_status)

    try:
        channel.emit(STATUS_UPDATED, "first")
        channel.emit(STATUS_UPDATED, "second")
        assert done.wait(timeout=2)
    finally:
        runner.stop()
        runner.join(timeout=2)

    assert [payload for payload, _ in seen] == ["first", "second"]
    assert all(thread is runner for _, thread in seen)
