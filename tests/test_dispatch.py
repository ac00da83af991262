"""Tests for the notification queue."""

import threading

from conic.dispatch import NotificationQueue


class TestNotificationQueue:
    """Tests for NotificationQueue."""

    def test_runs_in_fifo_order_on_worker_thread(self):
        queue = NotificationQueue()
        seen = []
        for i in range(5):
            queue.submit(lambda i=i: seen.append((i, threading.current_thread().name)))
        assert queue.join(2.0)
        assert [i for i, _ in seen] == [0, 1, 2, 3, 4]
        assert all(name == "conic-notify" for _, name in seen)
        queue.close()

    def test_exception_does_not_stop_worker(self):
        queue = NotificationQueue()
        seen = []

        def broken():
            raise ValueError("boom")

        queue.submit(broken)
        queue.submit(lambda: seen.append("after"))
        assert queue.join(2.0)
        assert seen == ["after"]
        queue.close()

    def test_close_drains_pending(self):
        queue = NotificationQueue()
        release = threading.Event()
        seen = []
        queue.submit(release.wait)
        queue.submit(lambda: seen.append("pending"))
        release.set()
        queue.close()
        assert seen == ["pending"]

    def test_submit_after_close_is_dropped(self):
        queue = NotificationQueue()
        queue.close()
        seen = []
        queue.submit(lambda: seen.append(1))
        assert queue.join(0.5)
        assert seen == []

    def test_join_timeout(self):
        queue = NotificationQueue()
        release = threading.Event()
        queue.submit(release.wait)
        assert queue.join(0.1) is False
        release.set()
        assert queue.join(2.0)
        queue.close()
