"""
목적:
- Python 계약 모델 계층의 공개 심볼을 제공한다.

설명:
- 엔진 응답/실행 기록/실행 통계 모델을 하나의 네임스페이스에서 재노출한다.

디자인 패턴:
- 모듈 퍼사드(Module Facade).

참조:
- src_py/qbash_stream/contracts/response_models.py
- src_py/qbash_stream/contracts/run_models.py
"""

from .response_models import EngineResponse, ResultLine, parse_response
from .run_models import LaunchRecord, QueryOutcome, RunStatistics

__all__ = [
    "EngineResponse",
    "ResultLine",
    "parse_response",
    "LaunchRecord",
    "QueryOutcome",
    "RunStatistics",
]
