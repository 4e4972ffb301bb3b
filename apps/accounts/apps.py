from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.accounts"
    label = "accounts"
    verbose_name = "계정"

    def ready(self):
        # 이메일 작업 핸들러 등록
        from apps.accounts import jobs  # noqa: F401
