"""작업 디스패처

서비스는 JobDispatcher 인터페이스에만 의존한다.

- OutboxJobDispatcher: 호출한 트랜잭션 안에서 outbox 행을 기록하고,
  커밋 후 Celery로 발행한다. 롤백되면 작업도 남지 않는다.
- InMemoryJobDispatcher: 테스트용. 요청을 리스트에 보관만 한다.
"""

import logging
from abc import ABC, abstractmethod

from django.conf import settings
from django.db import transaction
from django.utils.module_loading import import_string

from apps.jobs.models import OutboxJob
from apps.jobs.requests import JobRequest
from apps.jobs.tasks import publish_job

logger = logging.getLogger(__name__)


class JobDispatcher(ABC):
    """비동기 작업 큐 포트"""

    @abstractmethod
    def enqueue(self, job: JobRequest) -> object:
        """작업 등록 - 실패 시 예외를 던져 호출 트랜잭션을 롤백시킨다

        반환값은 구현별 등록 결과 (outbox 행, 요청 객체 등)
        """


class OutboxJobDispatcher(JobDispatcher):
    def enqueue(self, job: JobRequest) -> OutboxJob:
        outbox_job = OutboxJob.objects.create(handler=job.handler, payload=job.to_payload())
        logger.debug("작업 등록: %s", outbox_job)
        transaction.on_commit(lambda: publish_job(outbox_job.pk), robust=True)
        return outbox_job


class InMemoryJobDispatcher(JobDispatcher):
    def __init__(self):
        self.jobs: list[JobRequest] = []

    def enqueue(self, job: JobRequest) -> JobRequest:
        self.jobs.append(job)
        return job

    def jobs_of(self, job_type: type[JobRequest]) -> list[JobRequest]:
        return [job for job in self.jobs if isinstance(job, job_type)]

    def clear(self) -> None:
        self.jobs.clear()


def get_dispatcher() -> JobDispatcher:
    """settings.JOBS_DISPATCHER 에 지정된 디스패처 생성"""
    return import_string(settings.JOBS_DISPATCHER)()
