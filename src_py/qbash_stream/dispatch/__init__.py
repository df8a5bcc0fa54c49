"""
목적:
- 유한 동시성 디스패치 계층의 공개 진입점을 제공한다.

설명:
- 슬롯 풀/응답 싱크/디스패처를 함께 노출한다.

디자인 패턴:
- 파사드(Facade).

참조:
- src_py/qbash_stream/dispatch/dispatcher.py
"""

from .dispatcher import QueryDispatcher
from .response_sink import ResponseSink
from .slot_pool import SlotPool

__all__ = ["QueryDispatcher", "ResponseSink", "SlotPool"]
