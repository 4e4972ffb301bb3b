"""Outbox 작업 실행 Celery 태스크

- run_outbox_job: 등록된 핸들러로 작업 1건 실행 (지수 백오프 재시도)
- relay_pending_jobs: 커밋 후 발행에 실패한 pending 작업 재발행
- cleanup_finished_jobs: 보관 기간이 지난 성공 작업 삭제
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from celery import shared_task
from kombu.exceptions import OperationalError

from apps.jobs.models import OutboxJob, OutboxJobStatus
from apps.jobs.registry import UnknownJobHandler, get_handler

logger = logging.getLogger(__name__)

RETRY_BACKOFF_BASE = 2  # 초
RETRY_BACKOFF_MAX = 600
RELAY_BATCH_SIZE = 500


def retry_countdown(retries: int) -> int:
    """재시도 대기 시간 (2, 4, 8, ... 최대 600초)"""
    return min(RETRY_BACKOFF_BASE ** (retries + 1), RETRY_BACKOFF_MAX)


def publish_job(job_id: int) -> bool:
    """Celery 브로커로 작업 발행

    발행에 실패한 작업은 pending으로 남고 relay_pending_jobs가 다시 발행한다.

    Returns:
        True: 발행 성공, False: 발행 실패
    """
    try:
        run_outbox_job.delay(job_id)
    except OperationalError as exc:
        logger.warning("작업 발행 실패, 재발행 대기: job_id=%s error=%s", job_id, exc)
        return False
    except Exception:
        # 커밋 후 훅에서 호출되므로 요청을 실패시키지 않는다
        logger.exception("작업 발행 중 예외, 재발행 대기: job_id=%s", job_id)
        return False

    OutboxJob.objects.mark_dispatched(job_id)
    return True


@shared_task(bind=True, acks_late=True)
def run_outbox_job(self, job_id: int) -> str:
    """Outbox 작업 실행

    같은 작업이 두 번 이상 전달될 수 있으므로 이미 끝난 작업은 건너뛴다.
    """
    job = OutboxJob.objects.filter(pk=job_id).first()
    if job is None:
        logger.warning("존재하지 않는 작업: job_id=%s", job_id)
        return "missing"

    if job.status in (OutboxJobStatus.SUCCEEDED, OutboxJobStatus.FAILED):
        logger.info("이미 처리된 작업 건너뜀: %s", job)
        return job.status

    try:
        handler = get_handler(job.handler)
    except UnknownJobHandler:
        logger.error("등록되지 않은 핸들러: %s", job)
        job.mark_failed(f"unknown handler: {job.handler}", final=True)
        return job.status

    job.mark_started()
    try:
        handler(**job.payload)
    except Exception as exc:
        max_retries = settings.JOBS_MAX_RETRIES
        final = self.request.retries >= max_retries
        job.mark_failed(exc, final=final)
        if final:
            logger.error("작업 최종 실패: %s", job, exc_info=True)
            raise
        logger.warning(
            "작업 실패, 재시도 예정: %s retries=%s error=%s", job, self.request.retries, exc
        )
        raise self.retry(
            exc=exc, countdown=retry_countdown(self.request.retries), max_retries=max_retries
        ) from exc

    job.mark_succeeded()
    logger.info("작업 완료: %s", job)
    return job.status


@shared_task
def relay_pending_jobs() -> int:
    """발행되지 않은 pending 작업 재발행 (at-least-once 보장)"""
    cutoff = timezone.now() - timedelta(seconds=settings.JOBS_RELAY_GRACE_SECONDS)
    job_ids = list(
        OutboxJob.objects.pending_before(cutoff).values_list("pk", flat=True)[:RELAY_BATCH_SIZE]
    )

    published = sum(1 for job_id in job_ids if publish_job(job_id))
    if job_ids:
        logger.info("pending 작업 재발행: %s/%s", published, len(job_ids))
    return published


@shared_task
def cleanup_finished_jobs() -> int:
    """보관 기간이 지난 성공 작업 삭제"""
    older_than = timezone.now() - timedelta(days=settings.JOBS_RETENTION_DAYS)
    deleted_count = OutboxJob.objects.delete_finished(older_than)
    logger.info("완료된 작업 삭제: %s개", deleted_count)
    return deleted_count
