"""
목적:
- 엔진 응답 텍스트 인터페이스 모델을 정의한다.

설명:
- 엔진은 `QbasherVersion:<n>\\t<error_status>\\t<result_count>` 헤더 뒤에
  `결과\\t점수` 줄을 이어 붙인 텍스트를 콜백으로 전달한다.
- 헤더의 error_status가 음수이면 질의 단위 오류로 취급한다.
- 형식이 다른 텍스트(테스트용 에코 엔진 등)는 파싱하지 않고 None을 반환한다.

디자인 패턴:
- DTO(Data Transfer Object).

참조:
- src_py/qbash_stream/dispatch/dispatcher.py
"""

from __future__ import annotations

from pydantic import BaseModel, Field

RESPONSE_VERSION_PREFIX = "QbasherVersion:"


class ResultLine(BaseModel):
    """응답 결과 한 줄 모델."""

    text: str
    score: float


class EngineResponse(BaseModel):
    """파싱된 엔진 응답 모델."""

    version: str = Field(min_length=1)
    error_status: int
    result_count: int = Field(ge=0)
    results: list[ResultLine] = Field(default_factory=list)

    @property
    def is_error(self) -> bool:
        return self.error_status < 0


def parse_response(text: str) -> EngineResponse | None:
    """응답 텍스트를 `EngineResponse`로 변환한다. 형식이 다르면 None."""
    lines = text.splitlines()
    if not lines or not lines[0].startswith(RESPONSE_VERSION_PREFIX):
        return None

    header = lines[0].split("\t")
    if len(header) != 3:
        return None

    try:
        error_status = int(header[1])
        result_count = int(header[2])
    except ValueError:
        return None

    results: list[ResultLine] = []
    for line in lines[1:]:
        if not line:
            continue
        result_text, sep, raw_score = line.rpartition("\t")
        if not sep:
            return None
        try:
            score = float(raw_score)
        except ValueError:
            return None
        results.append(ResultLine(text=result_text, score=score))

    return EngineResponse(
        version=header[0][len(RESPONSE_VERSION_PREFIX):] or "0",
        error_status=error_status,
        result_count=max(result_count, 0),
        results=results,
    )
