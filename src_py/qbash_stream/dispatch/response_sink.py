"""
목적:
- 여러 워커 스레드에서 동시에 도착하는 엔진 응답을 단일 출력 스트림에 기록한다.

설명:
- 재진입 불가 잠금을 비차단 시도로 얻고, 실패하면 1ms 쉬었다가 다시 시도한다.
- 잠금을 쥔 동안 응답 전체와 줄바꿈을 쓰고 flush하므로 두 응답이 섞이지 않는다.
- 서로 다른 질의 응답 간 순서는 잠금을 먼저 얻은 순서(실제 완료 경쟁 순서)를 따른다.

디자인 패턴:
- 직렬화 싱크(Serializing Sink).

참조:
- src_py/qbash_stream/dispatch/dispatcher.py
"""

from __future__ import annotations

import sys
import threading
import time
from typing import TextIO

LOCK_RETRY_SLEEP_SEC = 0.001


class ResponseSink:
    """엔진 응답 출력 싱크."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout
        self._lock = threading.Lock()
        self._emitted = 0

    @property
    def emitted_count(self) -> int:
        return self._emitted

    def emit(self, response_text: str) -> None:
        """응답 1건을 출력한다."""
        while not self._lock.acquire(blocking=False):
            time.sleep(LOCK_RETRY_SLEEP_SEC)
        try:
            self._stream.write(f"{response_text}\n")
            self._stream.flush()
            self._emitted += 1
        finally:
            self._lock.release()
