"""
목적:
- QBASH 스트림 하네스의 예외 타입을 표준화한다.

설명:
- 기동 단계 오류(설정/포인터 폭/엔진 초기화/네이티브 라이브러리)를 명시적으로 구분해
  CLI가 종료 코드와 메시지를 결정할 수 있게 한다.
- 질의 단위 오류는 예외로 전파하지 않고 디스패처가 로그/통계로 기록한다.

디자인 패턴:
- 계층형 예외(Hierarchical Exception).

참조:
- src_py/qbash_stream/orchestration/harness.py
- src_py/qbash_stream/runtime/bridge.py
- src_py/qbash_stream/cli.py
"""


class HarnessError(Exception):
    """QBASH 스트림 하네스 공통 베이스 예외."""


class ConfigurationError(HarnessError):
    """설정값이 유효하지 않을 때 발생한다."""


class DependencyUnavailableError(HarnessError):
    """네이티브 엔진 라이브러리 등 필수 의존성을 사용할 수 없을 때 발생한다."""


class PointerWidthError(HarnessError):
    """런타임 포인터 폭이 8바이트가 아닐 때 발생한다."""

    def __init__(self, width: int) -> None:
        super().__init__(f"Pointer Size: {width}.  Must be 8.")
        self.width = width


class EngineInitializationError(HarnessError):
    """엔진 초기화 호출이 0이 아닌 오류 코드를 반환했을 때 발생한다."""

    def __init__(self, error_code: int, explanation: str | None = None) -> None:
        message = f"Error {error_code} while initializing shared files"
        if explanation:
            message = f"{message}: {explanation}"
        super().__init__(message)
        self.error_code = error_code


class SlotStateError(HarnessError):
    """슬롯 풀 사전조건(빈 슬롯에만 할당)을 위반했을 때 발생한다."""
