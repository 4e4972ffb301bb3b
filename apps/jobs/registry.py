"""작업 핸들러 레지스트리

핸들러는 ``@register_handler`` 데코레이터로 자신을 등록한다.
각 앱의 ``AppConfig.ready()`` 에서 핸들러 모듈을 import 해야 워커에서도 등록된다.
"""

from collections.abc import Callable

from django.core.exceptions import ImproperlyConfigured

JobHandler = Callable[..., None]

_handlers: dict[str, JobHandler] = {}


class UnknownJobHandler(LookupError):
    """등록되지 않은 핸들러 이름"""


def register_handler(name: str) -> Callable[[JobHandler], JobHandler]:
    """핸들러 등록 데코레이터

    Raises:
        ImproperlyConfigured: 같은 이름으로 다른 함수가 이미 등록된 경우
    """

    def decorator(func: JobHandler) -> JobHandler:
        existing = _handlers.get(name)
        if existing is not None and existing is not func:
            raise ImproperlyConfigured(f"작업 핸들러 중복 등록: {name}")
        _handlers[name] = func
        return func

    return decorator


def get_handler(name: str) -> JobHandler:
    try:
        return _handlers[name]
    except KeyError:
        raise UnknownJobHandler(name) from None


def registered_handlers() -> list[str]:
    return sorted(_handlers)
