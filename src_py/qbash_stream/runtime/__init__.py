"""
목적:
- 네이티브 엔진 런타임 브릿지 계층의 공개 진입점을 제공한다.

설명:
- 디스패처/하네스는 네이티브 라이브러리를 직접 다루지 않고 본 래퍼를 통해 호출한다.

디자인 패턴:
- 파사드(Facade).

참조:
- src_py/qbash_stream/runtime/bridge.py
- src_py/qbash_stream/runtime/error_codes.py
"""

from .bridge import NativeEngineBridge, QueryEngine, ResponseCallback, pointer_width
from .error_codes import ErrorExplanation, explain_error, is_fatal

__all__ = [
    "NativeEngineBridge",
    "QueryEngine",
    "ResponseCallback",
    "pointer_width",
    "ErrorExplanation",
    "explain_error",
    "is_fatal",
]
