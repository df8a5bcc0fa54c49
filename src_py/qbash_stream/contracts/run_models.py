"""
목적:
- 질의 실행 기록/실행 통계 인터페이스 모델을 정의한다.

설명:
- 디스패처가 남기는 실행 순서 기록과 질의별 결과를 모델로 고정한다.
- 종료 시점에 한 번 집계하는 실행 통계와 요약 줄 형식을 제공한다.

디자인 패턴:
- 상태 객체(State DTO).

참조:
- src_py/qbash_stream/dispatch/dispatcher.py
- src_py/qbash_stream/orchestration/harness.py
"""

from __future__ import annotations

import numpy as np
from pydantic import BaseModel, Field


class LaunchRecord(BaseModel):
    """질의 실행 시작 기록 모델."""

    launch_index: int = Field(ge=0)
    slot: int = Field(ge=0)
    query: str


class QueryOutcome(BaseModel):
    """질의 한 건의 완료 결과 모델."""

    launch_index: int = Field(ge=0)
    slot: int = Field(ge=0)
    query: str
    status_code: int | None = Field(default=None)
    response_status: int | None = Field(default=None)
    error: str | None = Field(default=None)
    elapsed_ms: float = Field(default=0.0, ge=0.0)

    @property
    def succeeded(self) -> bool:
        if self.error is not None or self.status_code != 0:
            return False
        return self.response_status is None or self.response_status >= 0


class RunStatistics(BaseModel):
    """하네스 실행 통계 모델."""

    queries_processed: int = Field(ge=0)
    queries_completed: int = Field(ge=0)
    responses_emitted: int = Field(default=0, ge=0)
    failed_queries: int = Field(default=0, ge=0)
    elapsed_ms: float = Field(ge=0.0)
    qps: float = Field(ge=0.0)
    peak_in_flight: int = Field(default=0, ge=0)
    latency_p50_ms: float = Field(default=0.0, ge=0.0)
    latency_p95_ms: float = Field(default=0.0, ge=0.0)
    latency_max_ms: float = Field(default=0.0, ge=0.0)

    @classmethod
    def from_outcomes(
        cls,
        *,
        queries_processed: int,
        outcomes: list[QueryOutcome],
        elapsed_ms: float,
        responses_emitted: int = 0,
        peak_in_flight: int = 0,
    ) -> RunStatistics:
        """질의 결과 목록에서 통계를 집계한다."""
        latencies = np.asarray([outcome.elapsed_ms for outcome in outcomes], dtype=np.float64)
        if latencies.size:
            p50, p95 = np.percentile(latencies, [50, 95])
            latency_max = float(latencies.max())
        else:
            p50 = p95 = latency_max = 0.0

        qps = 1000.0 * queries_processed / elapsed_ms if elapsed_ms > 0 else 0.0

        return cls(
            queries_processed=queries_processed,
            queries_completed=len(outcomes),
            responses_emitted=responses_emitted,
            failed_queries=sum(1 for outcome in outcomes if not outcome.succeeded),
            elapsed_ms=elapsed_ms,
            qps=qps,
            peak_in_flight=peak_in_flight,
            latency_p50_ms=float(p50),
            latency_p95_ms=float(p95),
            latency_max_ms=latency_max,
        )

    def summary_line(self) -> str:
        """표준 출력용 최종 요약 줄을 만든다."""
        return (
            f"[done] queries_processed={self.queries_processed} "
            f"elapsed_ms={self.elapsed_ms:.0f} qps={self.qps:.2f}"
        )
