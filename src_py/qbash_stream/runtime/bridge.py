"""
목적:
- Python과 네이티브 질의 엔진 라이브러리 간 호출 경계를 제공한다.

설명:
- 엔진 계약(`QueryEngine`)은 초기화/비동기 질의 실행/해제 세 가지 호출로 구성된다.
- `NativeEngineBridge`는 ctypes로 C ABI 심볼을 바인딩해 계약을 구현한다.
- 라이브러리 미설치/심볼 누락을 명시적 예외로 변환한다.

디자인 패턴:
- 어댑터(Adapter).

참조:
- src_py/qbash_stream/dispatch/dispatcher.py
- src_py/qbash_stream/orchestration/harness.py
"""

from __future__ import annotations

import ctypes
import ctypes.util
import logging
import os
from typing import Any, Callable, Protocol

from qbash_stream.exceptions import DependencyUnavailableError
from qbash_stream.shared.settings import default_settings

logger = logging.getLogger(__name__)

ResponseCallback = Callable[[str], None]

_NATIVE_RESPONSE = ctypes.CFUNCTYPE(None, ctypes.c_wchar_p)
_LIBRARY_SUFFIXES = (".so", ".dll", ".dylib")


class QueryEngine(Protocol):
    """외부 질의 엔진 계약."""

    def initialize(self, file_list: str) -> tuple[Any, int]:
        """콤마 구분 파일 목록으로 엔진 환경을 만들고 (핸들, 오류 코드)를 반환한다."""
        ...

    def execute_query_async(self, query: str, environment: Any, on_response: ResponseCallback) -> int:
        """질의를 실행하고 응답 문자열을 콜백으로 전달한 뒤 상태 코드를 반환한다."""
        ...

    def deinitialize(self, environment: Any) -> None:
        """엔진 환경을 해제한다."""
        ...


def pointer_width() -> int:
    """현재 런타임의 네이티브 포인터 폭(바이트)을 반환한다."""
    return ctypes.sizeof(ctypes.c_void_p)


class NativeEngineBridge:
    """ctypes 기반 네이티브 엔진 브릿지 래퍼."""

    def __init__(self, library: str | None = None) -> None:
        name = library or default_settings().native_library
        try:
            self._lib = ctypes.CDLL(_resolve_library(name))
        except OSError as exc:
            raise DependencyUnavailableError(
                f"네이티브 엔진 라이브러리({name})를 불러오지 못했습니다: {exc}"
            ) from exc

        self._initialize_fn = self._bind(
            ("NativeInitializeSharedFiles",),
            ctypes.c_int,
            [ctypes.c_char_p, ctypes.POINTER(ctypes.c_void_p)],
        )
        self._execute_fn = self._bind(
            ("NativeExecuteQueryAsync",),
            ctypes.c_int,
            [ctypes.c_wchar_p, ctypes.c_void_p, _NATIVE_RESPONSE],
        )
        # 헤더와 호출 측의 대소문자 표기가 다르다.
        self._deinitialize_fn = self._bind(
            ("NativeDeInitialize", "NativeDeinitialize"),
            None,
            [ctypes.POINTER(ctypes.c_void_p)],
            required=False,
        )

    def initialize(self, file_list: str) -> tuple[ctypes.c_void_p, int]:
        """엔진 공유 파일을 적재한다."""
        environment = ctypes.c_void_p()
        error_code = self._initialize_fn(file_list.encode("utf-8"), ctypes.byref(environment))
        return environment, int(error_code)

    def execute_query_async(
        self,
        query: str,
        environment: ctypes.c_void_p,
        on_response: ResponseCallback,
    ) -> int:
        """질의 1건을 실행한다. 엔진은 반환 전에 콜백을 호출한다."""

        def _deliver(raw: str | None) -> None:
            try:
                on_response(raw or "")
            except Exception:  # noqa: BLE001 - 네이티브 스택으로 예외를 넘기지 않는다
                logger.exception("응답 콜백 처리 중 오류가 발생했습니다: query=%r", query)

        callback = _NATIVE_RESPONSE(_deliver)
        return int(self._execute_fn(query, environment, callback))

    def deinitialize(self, environment: ctypes.c_void_p) -> None:
        """엔진 환경을 해제한다. 해제 심볼이 없으면 아무 것도 하지 않는다."""
        if self._deinitialize_fn is None:
            logger.debug("해제 심볼이 없어 엔진 해제를 건너뜁니다")
            return
        self._deinitialize_fn(ctypes.byref(environment))

    def _bind(
        self,
        names: tuple[str, ...],
        restype,
        argtypes: list,
        required: bool = True,
    ):
        for name in names:
            fn = getattr(self._lib, name, None)
            if fn is None:
                continue
            fn.restype = restype
            fn.argtypes = argtypes
            return fn

        if required:
            raise DependencyUnavailableError(
                f"네이티브 엔진 라이브러리에 필수 심볼이 없습니다: {' / '.join(names)}"
            )
        return None


def _resolve_library(name: str) -> str:
    if os.sep in name or name.endswith(_LIBRARY_SUFFIXES):
        return name
    return ctypes.util.find_library(name) or name
