"""작업 디스패처 테스트"""

from dataclasses import dataclass
from unittest.mock import patch

import pytest
from django.db import transaction
from kombu.exceptions import OperationalError

from apps.jobs.dispatcher import InMemoryJobDispatcher, OutboxJobDispatcher, get_dispatcher
from apps.jobs.models import OutboxJob, OutboxJobStatus
from apps.jobs.requests import JobRequest
from apps.jobs.tasks import publish_job

pytestmark = pytest.mark.django_db


@dataclass(frozen=True)
class PingJob(JobRequest):
    handler = "tests.ping"

    target: str


class TestOutboxJobDispatcher:
    def test_enqueue_writes_pending_row(self):
        outbox_job = OutboxJobDispatcher().enqueue(PingJob(target="a"))

        outbox_job.refresh_from_db()
        assert outbox_job.handler == "tests.ping"
        assert outbox_job.payload == {"target": "a"}
        assert outbox_job.status == OutboxJobStatus.PENDING
        assert outbox_job.attempts == 0

    def test_publishes_only_after_commit(self, django_capture_on_commit_callbacks):
        with patch("apps.jobs.tasks.run_outbox_job") as run_task:
            with django_capture_on_commit_callbacks(execute=False) as callbacks:
                outbox_job = OutboxJobDispatcher().enqueue(PingJob(target="a"))

            run_task.delay.assert_not_called()
            assert len(callbacks) == 1

            callbacks[0]()

        run_task.delay.assert_called_once_with(outbox_job.pk)
        outbox_job.refresh_from_db()
        assert outbox_job.status == OutboxJobStatus.DISPATCHED
        assert outbox_job.dispatched_at is not None

    def test_commit_hook_is_robust(self):
        """발행 훅 예외가 이미 커밋된 요청을 실패시키지 않도록 robust 등록"""
        with patch("apps.jobs.dispatcher.transaction.on_commit") as on_commit:
            OutboxJobDispatcher().enqueue(PingJob(target="a"))

        assert on_commit.call_args.kwargs == {"robust": True}

    def test_rollback_discards_job(self, django_capture_on_commit_callbacks):
        with patch("apps.jobs.tasks.run_outbox_job") as run_task:
            with django_capture_on_commit_callbacks(execute=True) as callbacks:
                with pytest.raises(RuntimeError):
                    with transaction.atomic():
                        OutboxJobDispatcher().enqueue(PingJob(target="a"))
                        raise RuntimeError("rollback")

        assert callbacks == []
        assert not OutboxJob.objects.exists()
        run_task.delay.assert_not_called()


class TestPublishJob:
    def test_broker_error_leaves_job_pending(self):
        outbox_job = OutboxJob.objects.create(handler="tests.ping")

        with patch("apps.jobs.tasks.run_outbox_job") as run_task:
            run_task.delay.side_effect = OperationalError("broker down")
            assert publish_job(outbox_job.pk) is False

        outbox_job.refresh_from_db()
        assert outbox_job.status == OutboxJobStatus.PENDING

    def test_unexpected_error_leaves_job_pending(self):
        outbox_job = OutboxJob.objects.create(handler="tests.ping")

        with patch("apps.jobs.tasks.run_outbox_job") as run_task:
            run_task.delay.side_effect = RuntimeError("serializer exploded")
            assert publish_job(outbox_job.pk) is False

        outbox_job.refresh_from_db()
        assert outbox_job.status == OutboxJobStatus.PENDING

    def test_does_not_overwrite_finished_status(self):
        """eager 실행 등으로 먼저 끝난 작업은 dispatched로 되돌리지 않음"""
        outbox_job = OutboxJob.objects.create(
            handler="tests.ping", status=OutboxJobStatus.SUCCEEDED
        )

        with patch("apps.jobs.tasks.run_outbox_job"):
            assert publish_job(outbox_job.pk) is True

        outbox_job.refresh_from_db()
        assert outbox_job.status == OutboxJobStatus.SUCCEEDED


class TestInMemoryJobDispatcher:
    def test_records_jobs_in_order(self):
        dispatcher = InMemoryJobDispatcher()

        assert dispatcher.enqueue(PingJob(target="a")) == PingJob(target="a")
        dispatcher.enqueue(PingJob(target="b"))

        assert dispatcher.jobs == [PingJob(target="a"), PingJob(target="b")]
        assert dispatcher.jobs_of(PingJob) == dispatcher.jobs
        assert not OutboxJob.objects.exists()

    def test_clear(self):
        dispatcher = InMemoryJobDispatcher()
        dispatcher.enqueue(PingJob(target="a"))

        dispatcher.clear()

        assert dispatcher.jobs == []


def test_get_dispatcher_from_settings(settings):
    settings.JOBS_DISPATCHER = "apps.jobs.dispatcher.InMemoryJobDispatcher"
    assert isinstance(get_dispatcher(), InMemoryJobDispatcher)

    settings.JOBS_DISPATCHER = "apps.jobs.dispatcher.OutboxJobDispatcher"
    assert isinstance(get_dispatcher(), OutboxJobDispatcher)
