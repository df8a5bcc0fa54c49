"""
목적:
- 프로젝트 기본 메타 설정을 제공한다.

설명:
- 문서/로그/진단에서 공통으로 사용할 식별자와 네이티브 라이브러리 기본값을 유지한다.

디자인 패턴:
- 값 객체(Value Object).

참조:
- src_py/qbash_stream/runtime/bridge.py
- src_py/qbash_stream/cli.py
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProjectSettings(BaseModel):
    """QBASH 스트림 하네스 기본 메타 설정 모델."""

    project_name: str = Field(default="QBASH Stream Harness")
    native_library: str = Field(default="QBASHQ-lib")
    library_env_key: str = Field(default="QBASH_STREAM_LIBRARY")
    log_level_env_key: str = Field(default="QBASH_STREAM_LOG_LEVEL")
    required_pointer_width: int = Field(default=8)


def default_settings() -> ProjectSettings:
    """기본 설정 객체를 생성한다."""
    return ProjectSettings()
