import asyncio
import io
import time
from pathlib import Path

import pytest
from conftest import EchoEngine, GatedEngine

from qbash_stream.config.models import DispatchConfig, EngineConfig, HarnessConfig
from qbash_stream.exceptions import EngineInitializationError, PointerWidthError
from qbash_stream.orchestration.harness import QueryHarness


def make_config(tmp_path: Path, *, partial_query: str = "", query_streams: int = 2) -> HarnessConfig:
    return HarnessConfig(
        engine=EngineConfig(index_dir=str(tmp_path)),
        dispatch=DispatchConfig(query_streams=query_streams),
        partial_query=partial_query,
    )


@pytest.mark.asyncio
async def test_run_reports_statistics_and_tears_down(tmp_path: Path) -> None:
    (tmp_path / "QBASH.query_batch").write_text("alpha\nbeta\ngamma\n", encoding="utf-8")
    engine = EchoEngine(delay_range=(0.001, 0.01))
    output = io.StringIO()

    statistics = await QueryHarness(
        make_config(tmp_path), engine_factory=lambda: engine, output=output
    ).run()

    assert statistics.queries_processed == 3
    assert statistics.queries_completed == 3
    assert statistics.responses_emitted == 3
    assert statistics.failed_queries == 0
    assert statistics.peak_in_flight <= 2
    assert statistics.elapsed_ms > 0
    assert statistics.latency_max_ms >= statistics.latency_p50_ms
    assert sorted(output.getvalue().splitlines()) == ["ECHO:alpha", "ECHO:beta", "ECHO:gamma"]
    assert engine.deinitialized == ["env-handle"]


@pytest.mark.asyncio
async def test_default_file_list_includes_existing_optional_files(tmp_path: Path) -> None:
    (tmp_path / "QBASH.config").write_text("", encoding="utf-8")
    engine = EchoEngine()

    await QueryHarness(
        make_config(tmp_path, partial_query="hello"),
        engine_factory=lambda: engine,
        output=io.StringIO(),
    ).run()

    files = engine.initialized_with[0].split(",")
    assert [Path(path).name for path in files] == [
        "QBASH.forward",
        "QBASH.if",
        "QBASH.vocab",
        "QBASH.doctable",
        "QBASH.config",
    ]


@pytest.mark.asyncio
async def test_pointer_width_is_checked_before_engine_is_built(tmp_path: Path) -> None:
    def factory():
        raise AssertionError("engine must not be built")

    harness = QueryHarness(
        make_config(tmp_path, partial_query="hello"),
        engine_factory=factory,
        pointer_width_fn=lambda: 4,
    )

    with pytest.raises(PointerWidthError) as exc_info:
        await harness.run()
    assert exc_info.value.width == 4


@pytest.mark.asyncio
async def test_negative_initialization_error_is_explained(tmp_path: Path) -> None:
    engine = EchoEngine(init_error=-200072)
    harness = QueryHarness(make_config(tmp_path, partial_query="hello"), engine_factory=lambda: engine)

    with pytest.raises(EngineInitializationError, match="Incomplete file list") as exc_info:
        await harness.run()

    assert exc_info.value.error_code == -200072
    assert engine.calls == []


@pytest.mark.asyncio
async def test_output_failure_counts_as_failed_query(tmp_path: Path) -> None:
    class BrokenSinkOutput(io.StringIO):
        def write(self, text: str) -> int:
            raise OSError("disk full")

    engine = EchoEngine()
    harness = QueryHarness(
        make_config(tmp_path, partial_query="hello"),
        engine_factory=lambda: engine,
        output=BrokenSinkOutput(),
    )

    statistics = await harness.run()

    assert statistics.failed_queries == 1
    assert engine.deinitialized == ["env-handle"]


@pytest.mark.asyncio
async def test_input_failure_keeps_event_loop_free_while_workers_finish(
    tmp_path: Path, gated_engine: GatedEngine
) -> None:
    class FailingStdin(io.StringIO):
        def __init__(self) -> None:
            super().__init__()
            self.reads = 0

        def readline(self, size: int = -1) -> str:
            self.reads += 1
            if self.reads == 1:
                return "alpha\n"
            raise OSError("stdin closed")

    async def open_gate_later() -> None:
        await asyncio.sleep(0.05)
        gated_engine.gate.set()

    harness = QueryHarness(
        make_config(tmp_path),
        engine_factory=lambda: gated_engine,
        output=io.StringIO(),
        stdin=FailingStdin(),
    )
    opener = asyncio.create_task(open_gate_later())
    started = time.perf_counter()

    with pytest.raises(OSError, match="stdin closed"):
        await harness.run()

    await opener
    assert time.perf_counter() - started < 2.0
    assert gated_engine.calls == ["alpha"]
    assert gated_engine.deinitialized == ["env-handle"]
    await asyncio.sleep(0.01)
