"""
목적:
- 질의 문자열을 최대 N개까지 동시에 엔진에 실행시키는 디스패처를 제공한다.

설명:
- 입력 줄마다 빈 슬롯을 얻어 질의를 워커 스레드에서 실행하고 슬롯을 점유 상태로 기록한다.
- 빈 슬롯 대기는 용량 N의 `asyncio.Semaphore` 획득으로 표현하고,
  작업 완료 콜백이 용량을 반납한다. 슬롯 회수는 `poll_and_release` 스윕으로 수행한다.
- 입력이 끝나면 모든 슬롯이 빌 때까지 남은 작업을 기다린다(drain).
- 질의 단위 실패(0이 아닌 상태 코드/응답 헤더의 음수 상태/예외)는 배치를 멈추지 않고
  `query failed` 로그와 결과 기록으로만 남긴다.

디자인 패턴:
- 유한 동시성 디스패처(Bounded Dispatcher).

참조:
- src_py/qbash_stream/dispatch/slot_pool.py
- src_py/qbash_stream/dispatch/response_sink.py
- src_py/qbash_stream/runtime/bridge.py
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterable, Iterable
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any

from qbash_stream.config.models import DispatchConfig
from qbash_stream.contracts.response_models import parse_response
from qbash_stream.contracts.run_models import LaunchRecord, QueryOutcome
from qbash_stream.dispatch.response_sink import ResponseSink
from qbash_stream.dispatch.slot_pool import SlotPool
from qbash_stream.exceptions import SlotStateError
from qbash_stream.runtime.bridge import QueryEngine
from qbash_stream.runtime.error_codes import explain_error

logger = logging.getLogger(__name__)


class QueryDispatcher:
    """유한 동시성 질의 디스패처."""

    def __init__(
        self,
        engine: QueryEngine,
        environment: Any,
        sink: ResponseSink,
        config: DispatchConfig | None = None,
        executor: Executor | None = None,
    ) -> None:
        self._config = config or DispatchConfig()
        self._engine = engine
        self._environment = environment
        self._sink = sink
        self._pool = SlotPool(self._config.query_streams)
        self._capacity = asyncio.Semaphore(self._config.query_streams)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self._config.query_streams,
            thread_name_prefix=self._config.worker_name_prefix,
        )
        self._launches: list[LaunchRecord] = []
        self._outcomes: list[QueryOutcome] = []
        self._completed = 0

    @property
    def pool(self) -> SlotPool:
        return self._pool

    @property
    def launches(self) -> list[LaunchRecord]:
        """실행 시작 순서대로 정렬된 기록."""
        return list(self._launches)

    @property
    def outcomes(self) -> list[QueryOutcome]:
        """완료 순서대로 정렬된 질의 결과."""
        return list(self._outcomes)

    @property
    def launched_count(self) -> int:
        return len(self._launches)

    @property
    def completed_count(self) -> int:
        """슬롯 회수로 관측된 완료 수."""
        return self._completed

    @property
    def in_flight(self) -> int:
        return self._pool.occupied_count

    @property
    def peak_in_flight(self) -> int:
        return self._pool.peak_occupied

    async def submit(self, query: str) -> LaunchRecord:
        """질의 1건을 빈 슬롯에 실행시킨다. 빈 슬롯이 생길 때까지 대기한다."""
        await self._capacity.acquire()
        self.reap()

        slot = self._pool.find_free_slot()
        if slot is None:
            self._capacity.release()
            raise SlotStateError("용량을 확보했지만 빈 슬롯이 없습니다")

        record = LaunchRecord(launch_index=len(self._launches), slot=slot, query=query)
        task = asyncio.create_task(
            self._run(record),
            name=f"{self._config.worker_name_prefix}-{record.launch_index}",
        )
        task.add_done_callback(self._release_capacity)
        self._pool.mark_occupied(slot, task)
        self._launches.append(record)

        logger.debug("query launched: launch_index=%d slot=%d", record.launch_index, slot)
        return record

    def reap(self) -> int:
        """점유 슬롯을 스윕해 완료된 작업의 슬롯을 회수한다."""
        released = 0
        for index in self._pool.occupied_slots():
            if self._pool.poll_and_release(index):
                released += 1

        self._completed += released
        return released

    async def drain(self) -> None:
        """모든 슬롯이 빌 때까지 남은 작업을 기다린다."""
        while not self._pool.is_drained():
            await asyncio.wait(self._pool.handles(), return_when=asyncio.FIRST_COMPLETED)
            self.reap()

    async def run(self, queries: AsyncIterable[str] | Iterable[str]) -> int:
        """질의 스트림을 모두 실행하고 drain까지 마친 뒤 실행 건수를 반환한다."""
        if isinstance(queries, AsyncIterable):
            async for query in queries:
                await self.submit(query)
        else:
            for query in queries:
                await self.submit(query)

        await self.drain()
        return self.launched_count

    def close(self) -> None:
        """디스패처가 만든 워커 스레드 풀을 종료한다."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    async def _run(self, record: LaunchRecord) -> None:
        loop = asyncio.get_running_loop()
        started = time.perf_counter()
        status_code: int | None = None
        response_status: int | None = None
        error: str | None = None

        try:
            status_code, response_status = await loop.run_in_executor(
                self._executor, self._execute, record.query
            )
        except Exception as exc:  # noqa: BLE001
            error = str(exc) or type(exc).__name__
            logger.exception(
                "query failed: launch_index=%d slot=%d query=%r",
                record.launch_index,
                record.slot,
                record.query,
            )

        outcome = QueryOutcome(
            launch_index=record.launch_index,
            slot=record.slot,
            query=record.query,
            status_code=status_code,
            response_status=response_status,
            error=error,
            elapsed_ms=(time.perf_counter() - started) * 1000.0,
        )
        if error is None and not outcome.succeeded:
            failing_code = status_code if status_code else response_status
            explanation = (
                explain_error(failing_code)
                if failing_code is not None and failing_code < 0
                else "no explanation for non-negative status"
            )
            logger.warning(
                "query failed: launch_index=%d slot=%d query=%r status_code=%s response_status=%s (%s)",
                record.launch_index,
                record.slot,
                record.query,
                status_code,
                response_status,
                explanation,
            )
        self._outcomes.append(outcome)

    def _execute(self, query: str) -> tuple[int, int | None]:
        # 워커 스레드에서 실행된다. 응답 상태는 질의별 지역 목록에만 기록한다.
        response_statuses: list[int] = []

        def on_response(text: str) -> None:
            parsed = parse_response(text)
            if parsed is not None and parsed.is_error:
                response_statuses.append(parsed.error_status)
            self._sink.emit(text)

        status_code = self._engine.execute_query_async(query, self._environment, on_response)
        return int(status_code), (response_statuses[0] if response_statuses else None)

    def _release_capacity(self, _task: asyncio.Task) -> None:
        self._capacity.release()
