"""Tests for the bounded-wait facilities"""

import signal
import threading
import time

import pytest

from server_matchers import (
    AutoBoundedWait,
    ConfigurationError,
    DeadlineExceededError,
    SignalBoundedWait,
    ThreadBoundedWait,
    create_bounded_wait,
)

signal_only = pytest.mark.skipif(
    not SignalBoundedWait.is_supported(),
    reason="SIGALRM timers need a Unix main thread",
)


class TestThreadBoundedWait:
    """Test the worker-thread strategy"""

    def test_completes_within_bound(self):
        calls = []
        ThreadBoundedWait().run_with_bound(0.5, lambda: calls.append(1))
        assert calls == [1]

    def test_raises_when_bound_exceeded(self):
        with pytest.raises(DeadlineExceededError) as exc_info:
            ThreadBoundedWait().run_with_bound(0.01, lambda: time.sleep(0.05))
        assert exc_info.value.timeout == 0.01
        assert exc_info.value.context["timeout_seconds"] == 0.01

    def test_reraises_worker_error_in_caller(self):
        def broken():
            raise LookupError("missing route")

        with pytest.raises(LookupError, match="missing route"):
            ThreadBoundedWait().run_with_bound(0.5, broken)

    def test_runs_on_worker_thread(self):
        seen = []
        ThreadBoundedWait().run_with_bound(0.5, lambda: seen.append(threading.current_thread()))
        assert seen[0] is not threading.current_thread()


@signal_only
class TestSignalBoundedWait:
    """Test the SIGALRM strategy"""

    def test_completes_within_bound(self):
        calls = []
        SignalBoundedWait().run_with_bound(0.5, lambda: calls.append(1))
        assert calls == [1]

    def test_interrupts_blocking_call(self):
        start = time.perf_counter()
        with pytest.raises(DeadlineExceededError):
            SignalBoundedWait().run_with_bound(0.01, lambda: time.sleep(1))
        assert time.perf_counter() - start < 0.5

    def test_propagates_other_errors(self):
        def broken():
            raise ValueError("bad")

        with pytest.raises(ValueError, match="bad"):
            SignalBoundedWait().run_with_bound(0.5, broken)

    def test_restores_previous_handler_and_disarms_timer(self):
        previous = signal.getsignal(signal.SIGALRM)

        with pytest.raises(DeadlineExceededError):
            SignalBoundedWait().run_with_bound(0.01, lambda: time.sleep(0.05))

        assert signal.getsignal(signal.SIGALRM) == previous
        assert signal.getitimer(signal.ITIMER_REAL) == (0.0, 0.0)

    def test_rejected_off_main_thread(self):
        errors = []

        def run():
            try:
                SignalBoundedWait().run_with_bound(0.5, lambda: None)
            except ConfigurationError as e:
                errors.append(e)

        worker = threading.Thread(target=run)
        worker.start()
        worker.join()

        assert len(errors) == 1

    def test_subject_swallowing_the_error_still_expires(self):
        """A handler catching Exception cannot hide an exceeded bound"""

        def handler():
            for _ in range(5):
                try:
                    time.sleep(0.02)
                except Exception:
                    pass

        with pytest.raises(DeadlineExceededError):
            SignalBoundedWait().run_with_bound(0.01, handler)
        assert signal.getitimer(signal.ITIMER_REAL) == (0.0, 0.0)

    def test_subject_wrapping_the_error_still_expires(self):
        def handler():
            try:
                time.sleep(1)
            except Exception as e:
                raise RuntimeError("request failed") from e

        with pytest.raises(DeadlineExceededError):
            SignalBoundedWait().run_with_bound(0.01, handler)

    def test_nested_wait_keeps_outer_bound(self):
        """An inner wait re-arms the enclosing timer when it finishes"""

        def subject():
            SignalBoundedWait().run_with_bound(1.0, lambda: None)
            time.sleep(0.2)

        start = time.perf_counter()
        with pytest.raises(DeadlineExceededError) as exc_info:
            SignalBoundedWait().run_with_bound(0.05, subject)

        assert exc_info.value.timeout == 0.05
        assert time.perf_counter() - start < 0.15
        assert signal.getitimer(signal.ITIMER_REAL) == (0.0, 0.0)

    def test_outer_bound_expires_during_inner_wait(self):
        def subject():
            SignalBoundedWait().run_with_bound(1.0, lambda: time.sleep(0.2))

        start = time.perf_counter()
        with pytest.raises(DeadlineExceededError) as exc_info:
            SignalBoundedWait().run_with_bound(0.02, subject)

        assert exc_info.value.timeout == 0.02
        assert time.perf_counter() - start < 0.15

    def test_inner_expiry_leaves_outer_running(self):
        outcomes = []

        def subject():
            try:
                SignalBoundedWait().run_with_bound(0.01, lambda: time.sleep(0.2))
            except DeadlineExceededError as e:
                outcomes.append(e.timeout)
            time.sleep(0.01)

        SignalBoundedWait().run_with_bound(1.0, subject)

        assert outcomes == [0.01]
        assert signal.getitimer(signal.ITIMER_REAL) == (0.0, 0.0)

    def test_handler_restored_after_nested_waits(self):
        previous = signal.getsignal(signal.SIGALRM)

        SignalBoundedWait().run_with_bound(
            0.5, lambda: SignalBoundedWait().run_with_bound(0.5, lambda: None)
        )

        assert signal.getsignal(signal.SIGALRM) == previous


class TestAutoBoundedWait:
    """Test per-call strategy selection"""

    def test_runs_on_main_thread(self):
        calls = []
        AutoBoundedWait().run_with_bound(0.5, lambda: calls.append(1))
        assert calls == [1]

    def test_runs_on_worker_thread(self):
        """An instance built on the main thread works from a worker"""
        bounded_wait = AutoBoundedWait()
        outcomes = []

        def run():
            try:
                bounded_wait.run_with_bound(0.01, lambda: time.sleep(0.05))
            except DeadlineExceededError as e:
                outcomes.append(e)

        worker = threading.Thread(target=run)
        worker.start()
        worker.join()

        assert len(outcomes) == 1


class TestCreateBoundedWait:
    """Test strategy selection"""

    def test_thread_strategy(self):
        assert isinstance(create_bounded_wait("thread"), ThreadBoundedWait)

    def test_signal_strategy(self):
        assert isinstance(create_bounded_wait("signal"), SignalBoundedWait)

    def test_auto_strategy(self):
        assert isinstance(create_bounded_wait("auto"), AutoBoundedWait)
        assert isinstance(create_bounded_wait(), AutoBoundedWait)

    def test_unknown_strategy(self):
        with pytest.raises(ConfigurationError) as exc_info:
            create_bounded_wait("fork")
        assert "Unknown deadline strategy" in str(exc_info.value)
