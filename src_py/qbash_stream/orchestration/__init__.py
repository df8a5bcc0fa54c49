"""
목적:
- 하네스 수명주기 조정 계층의 공개 심볼을 정의한다.

설명:
- CLI와 테스트는 본 계층을 통해 엔진 초기화부터 해제까지 한 번에 실행한다.

디자인 패턴:
- 퍼사드(Facade).

참조:
- src_py/qbash_stream/orchestration/harness.py
"""

from .harness import EngineFactory, QueryHarness

__all__ = ["EngineFactory", "QueryHarness"]
