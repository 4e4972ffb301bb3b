"""Outbox 작업 모델"""

from django.db import models
from django.utils import timezone


class OutboxJobStatus(models.TextChoices):
    PENDING = "pending", "대기"
    DISPATCHED = "dispatched", "발행됨"
    SUCCEEDED = "succeeded", "성공"
    FAILED = "failed", "실패"


class OutboxJobManager(models.Manager):
    """Outbox 작업 매니저"""

    def pending_before(self, cutoff):
        """cutoff 이전에 생성되었지만 아직 발행되지 않은 작업"""
        return self.filter(status=OutboxJobStatus.PENDING, created_at__lt=cutoff).order_by(
            "created_at"
        )

    def mark_dispatched(self, job_id) -> bool:
        """발행 완료 표시 (pending 상태일 때만)"""
        updated = self.filter(pk=job_id, status=OutboxJobStatus.PENDING).update(
            status=OutboxJobStatus.DISPATCHED, dispatched_at=timezone.now()
        )
        return updated == 1

    def delete_finished(self, older_than):
        """older_than 이전에 성공한 작업 삭제"""
        deleted_count, _ = self.filter(
            status=OutboxJobStatus.SUCCEEDED, completed_at__lt=older_than
        ).delete()
        return deleted_count


class OutboxJob(models.Model):
    """비즈니스 데이터와 같은 트랜잭션에 기록되는 작업 의도

    트랜잭션이 롤백되면 작업도 함께 사라지고, 커밋되면 Celery로 발행된다.
    """

    objects = OutboxJobManager()

    handler = models.CharField(max_length=100, help_text="등록된 핸들러 이름")
    payload = models.JSONField(default=dict, blank=True, help_text="핸들러 인자")

    status = models.CharField(
        max_length=20,
        choices=OutboxJobStatus.choices,
        default=OutboxJobStatus.PENDING,
        help_text="처리 상태",
    )
    attempts = models.PositiveIntegerField(default=0, help_text="실행 시도 횟수")
    last_error = models.TextField(blank=True, help_text="마지막 실패 사유")

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    dispatched_at = models.DateTimeField(null=True, blank=True, help_text="Celery 발행 시간")
    completed_at = models.DateTimeField(null=True, blank=True, help_text="완료/실패 확정 시간")

    class Meta:
        db_table = "outbox_jobs"
        ordering = ["-created_at"]
        verbose_name = "Outbox 작업"
        verbose_name_plural = "Outbox 작업"
        indexes = [
            models.Index(fields=["status", "created_at"], name="idx_outbox_status_created"),
        ]

    def __str__(self):
        return f"{self.handler}#{self.pk} ({self.status})"

    def mark_started(self):
        self.attempts += 1
        self.save(update_fields=["attempts"])

    def mark_succeeded(self):
        self.status = OutboxJobStatus.SUCCEEDED
        self.completed_at = timezone.now()
        self.last_error = ""
        self.save(update_fields=["status", "completed_at", "last_error"])

    def mark_failed(self, error, *, final: bool):
        """실패 기록 - final이면 더 이상 재시도하지 않음"""
        self.last_error = str(error)[:2000]
        update_fields = ["last_error"]
        if final:
            self.status = OutboxJobStatus.FAILED
            self.completed_at = timezone.now()
            update_fields += ["status", "completed_at"]
        self.save(update_fields=update_fields)
