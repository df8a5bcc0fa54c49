"""
목적:
- 엔진 초기화 -> 질의 실행 -> 엔진 해제 수명주기를 조정한다.

설명:
- 포인터 폭 검사는 엔진 라이브러리를 불러오기 전에 수행한다.
- 입력 소스를 먼저 결정해, 배치 파일 누락 같은 설정 오류로 엔진을 초기화하지 않게 한다.
- 초기화에 성공하면 어떤 경로로 끝나든 엔진 해제를 호출한다.
- 실행 시간은 질의 처리 시작부터 마지막 잔여 작업 완료까지 측정한다.

디자인 패턴:
- 조정자(Coordinator).

참조:
- src_py/qbash_stream/dispatch/dispatcher.py
- src_py/qbash_stream/inputs/sources.py
- src_py/qbash_stream/runtime/bridge.py
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, TextIO

from qbash_stream.config.models import HarnessConfig
from qbash_stream.contracts.run_models import RunStatistics
from qbash_stream.dispatch.dispatcher import QueryDispatcher
from qbash_stream.dispatch.response_sink import ResponseSink
from qbash_stream.exceptions import EngineInitializationError, PointerWidthError
from qbash_stream.inputs.sources import iter_query_lines, select_input_source
from qbash_stream.runtime.bridge import NativeEngineBridge, QueryEngine, pointer_width
from qbash_stream.runtime.error_codes import explain_error
from qbash_stream.shared.settings import default_settings

logger = logging.getLogger(__name__)

EngineFactory = Callable[[], QueryEngine]


class QueryHarness:
    """질의 엔진 하네스 수명주기 관리자."""

    def __init__(
        self,
        config: HarnessConfig,
        engine_factory: EngineFactory | None = None,
        output: TextIO | None = None,
        stdin: TextIO | None = None,
        pointer_width_fn: Callable[[], int] = pointer_width,
    ) -> None:
        self._config = config
        self._engine_factory = engine_factory or (lambda: NativeEngineBridge(config.engine.library))
        self._output = output
        self._stdin = stdin
        self._pointer_width_fn = pointer_width_fn

    async def run(self) -> RunStatistics:
        """설정된 입력의 모든 질의를 실행하고 실행 통계를 반환한다."""
        settings = default_settings()
        width = self._pointer_width_fn()
        if width != settings.required_pointer_width:
            raise PointerWidthError(width)

        source = select_input_source(self._config)
        file_list = self._config.engine.file_list_arg()
        logger.info(
            "Welcome to %s.  %d query streams.  Files are: %s",
            settings.project_name,
            self._config.dispatch.query_streams,
            file_list,
        )

        engine = self._engine_factory()
        environment, error_code = engine.initialize(file_list)
        if error_code != 0:
            explanation = str(explain_error(error_code)) if error_code < 0 else None
            raise EngineInitializationError(error_code, explanation)

        try:
            sink = ResponseSink(self._output)
            dispatcher = QueryDispatcher(engine, environment, sink, self._config.dispatch)
            started = time.perf_counter()
            try:
                processed = await dispatcher.run(iter_query_lines(source, self._stdin))
            finally:
                await asyncio.to_thread(dispatcher.close)
            elapsed_ms = (time.perf_counter() - started) * 1000.0

            statistics = RunStatistics.from_outcomes(
                queries_processed=processed,
                outcomes=dispatcher.outcomes,
                elapsed_ms=elapsed_ms,
                responses_emitted=sink.emitted_count,
                peak_in_flight=dispatcher.peak_in_flight,
            )
        finally:
            engine.deinitialize(environment)

        if statistics.failed_queries:
            logger.warning(
                "%d of %d queries failed", statistics.failed_queries, statistics.queries_processed
            )
        logger.info("run statistics: %s", statistics.model_dump_json())
        return statistics
