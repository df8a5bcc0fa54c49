"""
목적:
- 질의 입력 소스를 선택하고 한 줄씩 비동기로 공급한다.

설명:
- 우선순위: `-pq` 단일 질의 -> 파일 목록의 `.query_batch` 파일 -> 표준 입력.
- 줄 읽기는 `asyncio.to_thread`로 수행해 대화형 입력 중에도 이벤트 루프가 멈추지 않게 한다.
- 줄 끝 개행만 제거하며 빈 줄도 그대로 질의로 전달한다.
- 디코딩할 수 없는 바이트는 U+FFFD로 바꾸고 읽기를 계속한다.

디자인 패턴:
- 전략 선택(Strategy Selector).

참조:
- src_py/qbash_stream/config/models.py
- src_py/qbash_stream/orchestration/harness.py
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import AsyncIterator
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, TextIO

from qbash_stream.config.models import HarnessConfig
from qbash_stream.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

InputKind = Literal["partial_query", "batch_file", "stdin"]

STDIN_PROMPT = "Please enter queries (or tab-separated queries + options) one per line."


@dataclass(slots=True)
class InputSource:
    """선택된 질의 입력 소스."""

    kind: InputKind
    partial_query: str = ""
    path: Path | None = None


def select_input_source(config: HarnessConfig) -> InputSource:
    """설정에서 질의 입력 소스를 결정한다."""
    if config.partial_query:
        return InputSource(kind="partial_query", partial_query=config.partial_query)

    batch_file = config.engine.batch_file()
    if batch_file is not None:
        if not batch_file.is_file():
            raise ConfigurationError(f"질의 배치 파일이 존재하지 않습니다: {batch_file}")
        return InputSource(kind="batch_file", path=batch_file)

    return InputSource(kind="stdin")


async def iter_query_lines(source: InputSource, stdin: TextIO | None = None) -> AsyncIterator[str]:
    """입력 소스의 질의를 한 줄씩 생성한다."""
    if source.kind == "partial_query":
        yield source.partial_query
        return

    if source.kind == "batch_file":
        assert source.path is not None
        with source.path.open("r", encoding="utf-8", errors="replace") as reader:
            async for line in _read_lines(reader):
                yield line
        return

    logger.info(STDIN_PROMPT)
    async for line in _read_lines(stdin or sys.stdin):
        yield line


async def _read_lines(stream: TextIO) -> AsyncIterator[str]:
    while True:
        line = await asyncio.to_thread(stream.readline)
        if not line:
            return
        yield line.rstrip("\r\n")
