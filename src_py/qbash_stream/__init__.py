"""
목적:
- QBASH 스트림 하네스 Python 패키지의 공개 진입점을 제공한다.

설명:
- 핵심 클래스는 `QueryHarness`(수명주기)와 `QueryDispatcher`(유한 동시성 실행) 두 가지다.
- 설정/엔진 계약/계약 모델/예외를 함께 노출한다.

디자인 패턴:
- 퍼사드(Facade).

참조:
- src_py/qbash_stream/orchestration/harness.py
- src_py/qbash_stream/dispatch/dispatcher.py
"""

from .config.models import DispatchConfig, EngineConfig, HarnessConfig
from .contracts.response_models import EngineResponse, ResultLine, parse_response
from .contracts.run_models import LaunchRecord, QueryOutcome, RunStatistics
from .dispatch.dispatcher import QueryDispatcher
from .dispatch.response_sink import ResponseSink
from .dispatch.slot_pool import SlotPool
from .exceptions import (
    ConfigurationError,
    DependencyUnavailableError,
    EngineInitializationError,
    HarnessError,
    PointerWidthError,
    SlotStateError,
)
from .orchestration.harness import QueryHarness
from .runtime.bridge import NativeEngineBridge, QueryEngine, pointer_width
from .runtime.error_codes import ErrorExplanation, explain_error
from .version import __version__

__all__ = [
    "__version__",
    "QueryHarness",
    "QueryDispatcher",
    "SlotPool",
    "ResponseSink",
    "HarnessConfig",
    "EngineConfig",
    "DispatchConfig",
    "QueryEngine",
    "NativeEngineBridge",
    "pointer_width",
    "ErrorExplanation",
    "explain_error",
    "EngineResponse",
    "ResultLine",
    "parse_response",
    "LaunchRecord",
    "QueryOutcome",
    "RunStatistics",
    "HarnessError",
    "ConfigurationError",
    "DependencyUnavailableError",
    "PointerWidthError",
    "EngineInitializationError",
    "SlotStateError",
]
