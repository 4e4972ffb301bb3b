import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="OutboxJob",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("handler", models.CharField(help_text="등록된 핸들러 이름", max_length=100)),
                (
                    "payload",
                    models.JSONField(blank=True, default=dict, help_text="핸들러 인자"),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "대기"),
                            ("dispatched", "발행됨"),
                            ("succeeded", "성공"),
                            ("failed", "실패"),
                        ],
                        default="pending",
                        help_text="처리 상태",
                        max_length=20,
                    ),
                ),
                (
                    "attempts",
                    models.PositiveIntegerField(default=0, help_text="실행 시도 횟수"),
                ),
                ("last_error", models.TextField(blank=True, help_text="마지막 실패 사유")),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now, editable=False),
                ),
                (
                    "dispatched_at",
                    models.DateTimeField(blank=True, help_text="Celery 발행 시간", null=True),
                ),
                (
                    "completed_at",
                    models.DateTimeField(blank=True, help_text="완료/실패 확정 시간", null=True),
                ),
            ],
            options={
                "verbose_name": "Outbox 작업",
                "verbose_name_plural": "Outbox 작업",
                "db_table": "outbox_jobs",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["status", "created_at"], name="idx_outbox_status_created"
                    )
                ],
            },
        ),
    ]
