"""Tests for the calibration loop"""

import pytest

from server_matchers.calibration import BATCH_GROWTH_FACTOR, Calibrator
from server_matchers.config import BenchmarkConfig

# 2**-10 seconds: sums of this cost are exact in binary floating point
COST = 2**-10


class TestCalibrator:
    """Test Calibrator batch growth and projection"""

    @pytest.fixture()
    def calibrator(self, fake_clock):
        return Calibrator(clock=fake_clock, min_sample_seconds=0.01, clock_target_seconds=0.1)

    def test_batch_sizes_are_powers_of_ten(self, calibrator, subject_factory):
        """Batches grow 1, 10, 100 until a sample reaches the floor"""
        subject = subject_factory(COST)

        result = calibrator.calibrate(subject)

        assert [s.batch_size for s in result.samples] == [1, 10, 100]
        assert [s.batch_size for s in result.samples] == [
            BATCH_GROWTH_FACTOR**k for k in range(result.rounds)
        ]
        assert result.samples[-1].elapsed >= 0.01
        assert all(s.elapsed < 0.01 for s in result.samples[:-1])

    def test_batch_size_recovered_after_loop(self, calibrator, subject_factory):
        """The reported batch size is the one that produced the final sample"""
        result = calibrator.calibrate(subject_factory(COST))

        assert result.batch_size == 100
        assert result.sample_time == pytest.approx(100 * COST)

    def test_projected_iterations(self, calibrator, subject_factory):
        """floor(target / sample) * batch_size"""
        result = calibrator.calibrate(subject_factory(COST))

        # 0.1 / 0.09765625 = 1.024 -> 1 * 100
        assert result.iterations == 100

    def test_subject_called_once_per_batch_member(self, calibrator, subject_factory):
        """Calibration invokes the subject 1 + 10 + 100 times"""
        subject = subject_factory(COST)

        calibrator.calibrate(subject)

        assert subject.calls == 111

    def test_slow_callable_clamps_to_one_iteration(self, calibrator, subject_factory):
        """A callable slower than the window still gets one iteration"""
        subject = subject_factory(0.5)

        result = calibrator.calibrate(subject)

        assert result.batch_size == 1
        assert result.rounds == 1
        assert result.iterations == 1
        assert subject.calls == 1

    def test_non_advancing_clock_stops_at_round_cap(self, fake_clock, subject_factory):
        """A clock that never moves cannot loop forever"""
        calibrator = Calibrator(clock=fake_clock, max_rounds=3)
        subject = subject_factory(0.0)

        result = calibrator.calibrate(subject)

        assert result.rounds == 3
        assert result.sample_time == 0.0
        assert result.batch_size == 100
        assert result.iterations == 100
        assert subject.calls == 111

    def test_batch_size_never_below_one(self, fake_clock, subject_factory):
        """Even a single round leaves a batch size of one"""
        calibrator = Calibrator(clock=fake_clock, max_rounds=1)

        result = calibrator.calibrate(subject_factory(0.0))

        assert result.batch_size == 1
        assert result.iterations >= 1

    def test_project_iterations_guards_zero(self, calibrator):
        """Zero sample time falls back to the batch size"""
        assert calibrator.project_iterations(0.0, 1000) == 1000
        assert calibrator.project_iterations(0.0, 0) == 1

    def test_project_iterations_minimum_one(self, calibrator):
        """Projection never drops below one iteration"""
        assert calibrator.project_iterations(5.0, 1) == 1

    def test_subject_errors_propagate(self, calibrator):
        """Errors from the subject are not swallowed"""

        def broken():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            calibrator.calibrate(broken)

    def test_from_config(self, fake_clock):
        """Calibrator picks its limits from BenchmarkConfig"""
        config = BenchmarkConfig(
            min_sample_seconds=0.02,
            clock_target_seconds=0.5,
            max_calibration_rounds=4,
        )

        calibrator = Calibrator.from_config(config, clock=fake_clock)

        assert calibrator.clock is fake_clock
        assert calibrator.min_sample_seconds == 0.02
        assert calibrator.clock_target_seconds == 0.5
        assert calibrator.max_rounds == 4
