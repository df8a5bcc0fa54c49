"""
목적:
- QBASH 스트림 하네스의 설정 인터페이스를 정의한다.

설명:
- 엔진 파일 목록/디스패치 동시성/단일 질의 값을 단일 모델로 관리한다.
- 라이브러리는 환경 변수를 직접 읽지 않고, CLI가 생성한 설정 객체를 주입받는다.

디자인 패턴:
- 값 객체(Value Object).

참조:
- src_py/qbash_stream/cli.py
- src_py/qbash_stream/orchestration/harness.py
- src_py/qbash_stream/inputs/sources.py
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from qbash_stream.shared.settings import default_settings

DEFAULT_INDEX_DIR = "../test_data/wikipedia_titles"
INDEX_FILE_STEM = "QBASH"
REQUIRED_INDEX_SUFFIXES = ("forward", "if", "vocab", "doctable")
OPTIONAL_INDEX_SUFFIXES = ("config", "query_batch", "segment_rules", "substitution_rules")
QUERY_BATCH_SUFFIX = ".query_batch"


class EngineConfig(BaseModel):
    """엔진 초기화용 파일 목록 설정 모델."""

    library: str = Field(default_factory=lambda: default_settings().native_library, min_length=1)
    index_dir: str = Field(default=DEFAULT_INDEX_DIR, min_length=1)
    object_store_files: list[str] = Field(default_factory=list)

    @field_validator("object_store_files", mode="before")
    @classmethod
    def split_file_list(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [token.strip() for token in value.split(",") if token.strip()]
        return value

    def resolve_file_list(self) -> list[str]:
        """엔진에 전달할 파일 경로 목록을 결정한다.

        `object_store_files`가 주어지면 그대로 사용한다. 비어 있으면 `index_dir`
        아래 필수 인덱스 파일 4종과 디스크에 존재하는 선택 파일을 조합한다.
        """
        if self.object_store_files:
            return list(self.object_store_files)

        index_dir = Path(self.index_dir)
        files = [str(index_dir / f"{INDEX_FILE_STEM}.{suffix}") for suffix in REQUIRED_INDEX_SUFFIXES]
        for suffix in OPTIONAL_INDEX_SUFFIXES:
            candidate = index_dir / f"{INDEX_FILE_STEM}.{suffix}"
            if candidate.exists():
                files.append(str(candidate))
        return files

    def file_list_arg(self) -> str:
        """엔진 초기화 호출용 콤마 구분 문자열을 반환한다."""
        return ",".join(self.resolve_file_list())

    def batch_file(self) -> Path | None:
        """파일 목록에 포함된 `.query_batch` 경로를 반환한다."""
        for path in self.resolve_file_list():
            if path.endswith(QUERY_BATCH_SUFFIX):
                return Path(path)
        return None


class DispatchConfig(BaseModel):
    """질의 스트림 동시성 설정 모델."""

    query_streams: int = Field(default=10, ge=1, le=64)
    worker_name_prefix: str = Field(default="qbash-stream", min_length=1)


class HarnessConfig(BaseModel):
    """하네스 실행 설정 모델."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    dispatch: DispatchConfig = Field(default_factory=DispatchConfig)
    partial_query: str = Field(default="")
