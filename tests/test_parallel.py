"""Tests for the ordered section worker pool."""
import threading
import time

import pytest

from hostscope.core.deadline import Deadline
from hostscope.parallel.executor import OrderedTaskRunner, ParallelRunConfig


@pytest.fixture
def parallel_config():
    """Create a parallel run configuration."""
    return ParallelRunConfig(max_workers=2, deadline=5)


class TestParallelRunConfig:
    """Test ParallelRunConfig."""

    def test_default_config(self):
        """Test default configuration values."""
        config = ParallelRunConfig()
        assert config.max_workers == 1
        assert config.deadline is None

    def test_custom_config(self):
        """Test custom configuration values."""
        config = ParallelRunConfig(max_workers=4, deadline=30)
        assert config.max_workers == 4
        assert config.deadline == 30


class TestOrderedTaskRunner:
    """Test OrderedTaskRunner."""

    def test_init_default_config(self):
        """Test runner initialization with default config."""
        runner = OrderedTaskRunner()
        assert runner.config.max_workers == 1

    def test_results_in_submission_order(self, parallel_config):
        """Results follow task order even when later tasks finish first."""
        runner = OrderedTaskRunner(ParallelRunConfig(max_workers=3, deadline=5))

        def task(name, delay):
            def _run():
                time.sleep(delay)
                return name
            return _run

        tasks = [task("first", 0.3), task("second", 0.1), task("third", 0.0)]
        outcomes = runner.run(tasks)

        assert [o.value for o in outcomes] == ["first", "second", "third"]
        assert [o.index for o in outcomes] == [0, 1, 2]
        assert all(o.done for o in outcomes)

    def test_progress_callback(self, parallel_config):
        """Test progress callback receives (completed, total)."""
        runner = OrderedTaskRunner(parallel_config)
        progress_calls = []

        runner.run([lambda: 1, lambda: 2], progress_callback=lambda c, t: progress_calls.append((c, t)))

        assert len(progress_calls) == 2
        assert progress_calls[-1] == (2, 2)

    def test_task_exception_is_captured(self, parallel_config):
        """A raising task becomes an outcome with an error, other tasks still run."""
        runner = OrderedTaskRunner(parallel_config)

        def failing():
            raise ValueError("Error for section")

        outcomes = runner.run([failing, lambda: "ok"])

        assert outcomes[0].done is True
        assert "Error for section" in outcomes[0].error
        assert outcomes[1].value == "ok"

    def test_deadline_abandons_unfinished_tasks(self):
        """Tasks still running at the deadline are reported as not done."""
        runner = OrderedTaskRunner(ParallelRunConfig(max_workers=1))
        release = threading.Event()

        start = time.monotonic()
        try:
            outcomes = runner.run(
                [lambda: "fast", lambda: release.wait(10), lambda: "queued"],
                deadline=Deadline(0.3),
            )
        finally:
            release.set()

        assert time.monotonic() - start < 2
        assert outcomes[0].done and outcomes[0].value == "fast"
        assert outcomes[1].done is False
        assert outcomes[2].done is False

    def test_empty_task_list(self):
        assert OrderedTaskRunner().run([]) == []
