"""
목적:
- 저장소 루트에서 QBASH 스트림 하네스를 실행하는 드라이버 스크립트를 제공한다.

설명:
- 설치 없이 실행할 수 있도록 `src_py`를 import 경로에 추가한 뒤 CLI에 위임한다.
- 인자 형식은 `-index_dir=...`, `-object_store_files=...`, `-query_streams=...`, `-pq=...`, `-help`.

디자인 패턴:
- 드라이버(Driver Script).

참조:
- src_py/qbash_stream/cli.py
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src_py"))

from qbash_stream.cli import run  # noqa: E402

if __name__ == "__main__":
    run()
