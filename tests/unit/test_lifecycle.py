"""Unit tests for lifecycle state and worker tracking."""

import threading
import time

from webserver.lifecycle.state import ServerLifecycle


class TestServerLifecycle:
    """Tests for ServerLifecycle state management."""

    def test_initial_state(self):
        """Lifecycle starts without a stop request."""
        lifecycle = ServerLifecycle()
        assert not lifecycle.should_stop()
        assert lifecycle.active_worker_count() == 0

    def test_begin_shutdown_sets_stop_flag(self):
        """begin_shutdown makes the accept loop stop."""
        lifecycle = ServerLifecycle()
        lifecycle.begin_shutdown()
        assert lifecycle.should_stop()

    def test_register_and_cleanup_worker(self):
        """Worker threads can be registered and removed."""
        lifecycle = ServerLifecycle()
        thread = threading.Thread(target=lambda: None)
        lifecycle.register_worker(thread)
        assert lifecycle.active_worker_count() == 1
        lifecycle.cleanup_worker(thread)
        assert lifecycle.active_worker_count() == 0

    def test_cleanup_nonexistent_worker_is_safe(self):
        """Cleaning up an unknown worker does not raise."""
        lifecycle = ServerLifecycle()
        lifecycle.cleanup_worker(threading.Thread(target=lambda: None))
        assert lifecycle.active_worker_count() == 0

    def test_wait_for_workers_returns_when_idle(self):
        """Waiting with no workers returns immediately."""
        assert ServerLifecycle().wait_for_workers(0.5)

    def test_wait_for_workers_joins_finished_threads(self):
        """Workers finishing within the grace period are awaited."""
        lifecycle = ServerLifecycle()
        thread = threading.Thread(target=time.sleep, args=(0.1,))
        thread.start()
        lifecycle.register_worker(thread)
        assert lifecycle.wait_for_workers(2.0)
        assert not thread.is_alive()

    def test_wait_for_workers_times_out(self):
        """Long-running workers make the wait report failure."""
        lifecycle = ServerLifecycle()
        release = threading.Event()
        thread = threading.Thread(target=release.wait, args=(5,))
        thread.start()
        lifecycle.register_worker(thread)
        try:
            start = time.monotonic()
            assert not lifecycle.wait_for_workers(0.2)
            assert time.monotonic() - start < 2.0
        finally:
            release.set()
            thread.join()
