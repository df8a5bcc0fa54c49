"""
목적:
- 하네스 공통 메타 설정 공개 심볼을 정의한다.

설명:
- 네이티브 라이브러리 이름, 환경 변수 키, 요구 포인터 폭 기본값을 노출한다.
- CLI/브리지/수명주기 조정자가 같은 기본값을 공유한다.

디자인 패턴:
- 설정 객체(Configuration Object).

참조:
- src_py/qbash_stream/shared/settings.py
"""

from .settings import ProjectSettings, default_settings

__all__ = ["ProjectSettings", "default_settings"]
