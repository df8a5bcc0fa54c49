"""
목적:
- `-key=value` 형식 인자와 환경 변수로 하네스를 실행하는 CLI 진입점을 제공한다.

설명:
- 인식하지 못한 인자는 조용히 무시한다.
- 라이브러리 본체는 환경 변수를 직접 읽지 않는다. 본 모듈이 설정 객체를 만들어 주입한다.
- 기동 오류는 `[error] ...`를 stderr에 출력하고 종료 코드 1을 반환한다.
- 엔진 응답과 최종 요약 줄은 stdout(UTF-8)에 출력한다.

디자인 패턴:
- 드라이버(Driver Script).

참조:
- src_py/qbash_stream/config/models.py
- src_py/qbash_stream/orchestration/harness.py
- scripts/run-harness.py
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from typing import Callable, NoReturn, TextIO

from pydantic import ValidationError

from qbash_stream.config.models import DEFAULT_INDEX_DIR, DispatchConfig, EngineConfig, HarnessConfig
from qbash_stream.exceptions import ConfigurationError, HarnessError
from qbash_stream.orchestration.harness import EngineFactory, QueryHarness
from qbash_stream.runtime.bridge import pointer_width
from qbash_stream.shared.settings import default_settings

HELP_TEXT = """
qbash-stream is a simple front end to the QBASHER query API, designed to help find API bugs
prior to loading the library into a host process.  It supports the following options:

  -help                    - show this message.
  -index_dir=<directory>   - A directory potentially containing a single QBASHER index.
  -object_store_files=<comma-separated list of files> - Explicit paths to all the index files. (Instead of index_dir.)
  -query_streams=<integer> - The degree of parallelism used when running queries.
  -pq=<query_string>       - A single QBASHER query string.

If no -pq option is given, queries are read one per line, either from stdin or from a file called
QBASH.query_batch in index_dir or explicitly listed in -object_store_files.

Environment:
  QBASH_STREAM_LIBRARY     - Path or name of the native engine library (default: QBASHQ-lib).
  QBASH_STREAM_LOG_LEVEL   - Logging level written to stderr (default: WARNING).
"""


class HarnessArgumentParser(argparse.ArgumentParser):
    """인자 오류를 종료 코드 2 대신 `ConfigurationError`로 알리는 파서."""

    def error(self, message: str) -> NoReturn:
        raise ConfigurationError(f"인자가 유효하지 않습니다: {message}")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = HarnessArgumentParser(prog="qbash-stream", add_help=False, allow_abbrev=False)
    parser.add_argument("-help", action="store_true")
    parser.add_argument("-index_dir", default=None)
    parser.add_argument("-object_store_files", default="")
    parser.add_argument("-query_streams", default=None)
    parser.add_argument("-pq", default="")
    args, _unknown = parser.parse_known_args(argv)
    return args


def build_config(args: argparse.Namespace, environ: Mapping[str, str]) -> HarnessConfig:
    settings = default_settings()
    try:
        engine = EngineConfig(
            library=environ.get(settings.library_env_key) or settings.native_library,
            index_dir=args.index_dir or DEFAULT_INDEX_DIR,
            object_store_files=args.object_store_files,
        )
        dispatch = (
            DispatchConfig()
            if args.query_streams is None
            else DispatchConfig(query_streams=args.query_streams)
        )
        return HarnessConfig(engine=engine, dispatch=dispatch, partial_query=args.pq or "")
    except ValidationError as exc:
        raise ConfigurationError(f"설정값이 유효하지 않습니다: {exc}") from exc


def configure_logging(environ: Mapping[str, str], stream: TextIO) -> None:
    raw = environ.get(default_settings().log_level_env_key, "WARNING").strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=stream,
    )


def main(
    argv: Sequence[str] | None = None,
    *,
    stdout: TextIO | None = None,
    stdin: TextIO | None = None,
    stderr: TextIO | None = None,
    environ: Mapping[str, str] | None = None,
    engine_factory: EngineFactory | None = None,
    pointer_width_fn: Callable[[], int] = pointer_width,
) -> int:
    out = stdout or sys.stdout
    err = stderr or sys.stderr
    env = os.environ if environ is None else environ

    try:
        args = parse_args(argv)
    except ConfigurationError as exc:
        print(f"[error] {exc}", file=err)
        return 1

    if args.help:
        print(HELP_TEXT, file=out)
        return 0

    configure_logging(env, err)

    try:
        config = build_config(args, env)
        harness = QueryHarness(
            config,
            engine_factory=engine_factory,
            output=out,
            stdin=stdin,
            pointer_width_fn=pointer_width_fn,
        )
        statistics = asyncio.run(harness.run())
    except HarnessError as exc:
        print(f"[error] {exc}", file=err)
        return 1

    print(statistics.summary_line(), file=out)
    out.flush()
    return 0


def run() -> None:
    """콘솔 스크립트 진입점."""
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")
    if hasattr(sys.stdin, "reconfigure"):
        sys.stdin.reconfigure(encoding="utf-8", errors="replace")
    raise SystemExit(main())
