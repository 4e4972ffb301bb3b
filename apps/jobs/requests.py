"""작업 요청 계약

작업 요청은 핸들러 이름과 JSON 직렬화 가능한 payload로 구성된다.
서비스는 요청 객체만 만들고, 실행은 워커가 핸들러 이름으로 찾아서 수행한다.
"""

from dataclasses import asdict, dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class JobRequest:
    """작업 요청 베이스 클래스

    서브클래스는 ``handler`` 클래스 변수에 등록된 핸들러 이름을 지정하고,
    payload 필드를 dataclass 필드로 선언한다.
    """

    handler: ClassVar[str]

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)
