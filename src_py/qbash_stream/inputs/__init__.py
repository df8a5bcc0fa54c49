"""
목적:
- 질의 입력 소스 계층의 공개 심볼을 정의한다.

설명:
- 하네스는 입력 종류와 무관하게 동일한 비동기 줄 스트림을 받는다.

디자인 패턴:
- 퍼사드(Facade).

참조:
- src_py/qbash_stream/inputs/sources.py
"""

from .sources import InputSource, iter_query_lines, select_input_source

__all__ = ["InputSource", "iter_query_lines", "select_input_source"]
