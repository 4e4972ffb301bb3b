"""Outbox 작업 태스크 테스트

태스크는 직접 호출해 워커 없이 동기 실행한다.
"""

from datetime import timedelta
from unittest.mock import patch

import pytest
from celery.exceptions import Retry
from django.utils import timezone

from apps.jobs.models import OutboxJob, OutboxJobStatus
from apps.jobs.registry import register_handler
from apps.jobs.tasks import (
    cleanup_finished_jobs,
    relay_pending_jobs,
    retry_countdown,
    run_outbox_job,
)

pytestmark = pytest.mark.django_db

received = []


@register_handler("tests.record")
def record_handler(**payload):
    received.append(payload)


@register_handler("tests.fail")
def failing_handler(**payload):
    raise RuntimeError("smtp down")


@pytest.fixture(autouse=True)
def clear_received():
    received.clear()


class TestRunOutboxJob:
    def test_success(self):
        job = OutboxJob.objects.create(handler="tests.record", payload={"user_id": 1})

        assert run_outbox_job(job.pk) == OutboxJobStatus.SUCCEEDED

        job.refresh_from_db()
        assert received == [{"user_id": 1}]
        assert job.status == OutboxJobStatus.SUCCEEDED
        assert job.attempts == 1
        assert job.completed_at is not None

    def test_redelivered_job_is_skipped(self):
        job = OutboxJob.objects.create(handler="tests.record", status=OutboxJobStatus.SUCCEEDED)

        run_outbox_job(job.pk)

        assert received == []

    def test_missing_job(self):
        assert run_outbox_job(999999) == "missing"

    def test_unknown_handler_fails_without_retry(self):
        job = OutboxJob.objects.create(handler="tests.unregistered")

        run_outbox_job(job.pk)

        job.refresh_from_db()
        assert job.status == OutboxJobStatus.FAILED
        assert job.attempts == 0
        assert "unknown handler" in job.last_error

    def test_failure_schedules_retry(self, settings):
        settings.JOBS_MAX_RETRIES = 3
        job = OutboxJob.objects.create(handler="tests.fail")

        with patch.object(run_outbox_job, "retry", side_effect=Retry()) as retry:
            with pytest.raises(Retry):
                run_outbox_job(job.pk)

        assert retry.call_args.kwargs["countdown"] == 2
        assert retry.call_args.kwargs["max_retries"] == 3
        job.refresh_from_db()
        assert job.status == OutboxJobStatus.PENDING
        assert job.attempts == 1
        assert job.last_error == "smtp down"

    def test_final_failure(self, settings):
        settings.JOBS_MAX_RETRIES = 0
        job = OutboxJob.objects.create(handler="tests.fail")

        with pytest.raises(RuntimeError):
            run_outbox_job(job.pk)

        job.refresh_from_db()
        assert job.status == OutboxJobStatus.FAILED
        assert job.completed_at is not None
        assert job.last_error == "smtp down"


def test_retry_countdown_backoff():
    assert [retry_countdown(n) for n in range(4)] == [2, 4, 8, 16]
    assert retry_countdown(20) == 600


class TestRelayPendingJobs:
    def test_republishes_stale_pending_jobs(self, settings):
        settings.JOBS_RELAY_GRACE_SECONDS = 60
        stale = OutboxJob.objects.create(
            handler="tests.record", created_at=timezone.now() - timedelta(minutes=5)
        )
        OutboxJob.objects.create(handler="tests.record")
        OutboxJob.objects.create(
            handler="tests.record",
            status=OutboxJobStatus.DISPATCHED,
            created_at=timezone.now() - timedelta(minutes=5),
        )

        with patch("apps.jobs.tasks.run_outbox_job") as run_task:
            assert relay_pending_jobs() == 1

        run_task.delay.assert_called_once_with(stale.pk)
        stale.refresh_from_db()
        assert stale.status == OutboxJobStatus.DISPATCHED


def test_cleanup_finished_jobs(settings):
    settings.JOBS_RETENTION_DAYS = 7
    now = timezone.now()
    OutboxJob.objects.create(
        handler="tests.record",
        status=OutboxJobStatus.SUCCEEDED,
        completed_at=now - timedelta(days=8),
    )
    kept = OutboxJob.objects.create(
        handler="tests.record",
        status=OutboxJobStatus.SUCCEEDED,
        completed_at=now - timedelta(days=1),
    )

    assert cleanup_finished_jobs() == 1
    assert list(OutboxJob.objects.all()) == [kept]
