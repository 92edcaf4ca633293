"""Tests for background job scheduling."""

import asyncio

import pytest

from ponder.scheduler import AsyncioJobScheduler, JobScheduler


class RecordingJob:
    def __init__(self, fail_for: set[str] | None = None, delay: float = 0.0) -> None:
        self.fail_for = fail_for or set()
        self.delay = delay
        self.ran: list[str] = []
        self.running = 0
        self.peak = 0

    async def __call__(self, question_id: str) -> None:
        self.running += 1
        self.peak = max(self.peak, self.running)
        try:
            await asyncio.sleep(self.delay)
            if question_id in self.fail_for:
                raise RuntimeError(f"job {question_id} failed")
            self.ran.append(question_id)
        finally:
            self.running -= 1


class TestAsyncioJobScheduler:
    def test_is_job_scheduler(self):
        assert isinstance(AsyncioJobScheduler(RecordingJob()), JobScheduler)

    def test_rejects_zero_concurrency(self):
        with pytest.raises(ValueError):
            AsyncioJobScheduler(RecordingJob(), max_concurrent=0)

    def test_enqueue_outside_loop_waits_for_drain(self):
        job = RecordingJob()
        scheduler = AsyncioJobScheduler(job)

        scheduler.enqueue("q1")
        scheduler.enqueue("q2")
        assert job.ran == []
        assert scheduler.pending_count == 2

        asyncio.run(scheduler.drain())

        assert sorted(job.ran) == ["q1", "q2"]
        assert scheduler.pending_count == 0

    @pytest.mark.asyncio
    async def test_enqueue_inside_loop_starts_immediately(self):
        job = RecordingJob()
        scheduler = AsyncioJobScheduler(job)

        scheduler.enqueue("q1")
        await asyncio.sleep(0.01)

        assert job.ran == ["q1"]

    def test_held_jobs_start_with_next_enqueue_in_loop(self):
        job = RecordingJob()
        scheduler = AsyncioJobScheduler(job)
        scheduler.enqueue("q1")

        async def later():
            scheduler.enqueue("q2")
            assert scheduler.pending_count == 2
            await asyncio.sleep(0.01)

        asyncio.run(later())

        assert sorted(job.ran) == ["q1", "q2"]
        assert scheduler.pending_count == 0

    @pytest.mark.asyncio
    async def test_failures_are_swallowed(self, caplog):
        job = RecordingJob(fail_for={"bad"})
        scheduler = AsyncioJobScheduler(job)

        scheduler.enqueue("bad")
        scheduler.enqueue("good")
        with caplog.at_level("WARNING", logger="ponder.scheduler"):
            await scheduler.drain()

        assert job.ran == ["good"]
        assert "bad" in caplog.text

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self):
        job = RecordingJob(delay=0.01)
        scheduler = AsyncioJobScheduler(job, max_concurrent=2)

        for i in range(6):
            scheduler.enqueue(f"q{i}")
        await scheduler.drain()

        assert len(job.ran) == 6
        assert job.peak <= 2

    def test_drain_across_event_loops(self):
        job = RecordingJob()
        scheduler = AsyncioJobScheduler(job, max_concurrent=1)

        scheduler.enqueue("q1")
        asyncio.run(scheduler.drain())
        scheduler.enqueue("q2")
        asyncio.run(scheduler.drain())

        assert job.ran == ["q1", "q2"]
