import pytest
from pydantic import ValidationError

from qbash_stream.contracts.response_models import parse_response
from qbash_stream.contracts.run_models import LaunchRecord, QueryOutcome, RunStatistics


def test_parse_response_reads_header_and_results() -> None:
    response = parse_response("QbasherVersion:1\t0\t2\nParis\t0.912000\nParis, Texas\t0.5\n")

    assert response is not None
    assert response.version == "1"
    assert response.error_status == 0
    assert response.result_count == 2
    assert [(line.text, line.score) for line in response.results] == [
        ("Paris", 0.912),
        ("Paris, Texas", 0.5),
    ]
    assert not response.is_error


def test_parse_response_flags_negative_status() -> None:
    response = parse_response("QbasherVersion:1\t-41\t0\n")

    assert response is not None
    assert response.is_error
    assert response.results == []


@pytest.mark.parametrize(
    "text",
    ["ECHO:hello", "", "QbasherVersion:1\tzero\t0", "QbasherVersion:1\t0\t1\nno-score-column"],
)
def test_parse_response_ignores_other_shapes(text: str) -> None:
    assert parse_response(text) is None


def test_query_outcome_success_rules() -> None:
    base = {"launch_index": 0, "slot": 0, "query": "q"}

    assert QueryOutcome(**base, status_code=0).succeeded
    assert not QueryOutcome(**base, status_code=-3).succeeded
    assert not QueryOutcome(**base, status_code=None, error="boom").succeeded
    assert not QueryOutcome(**base, status_code=0, response_status=-41).succeeded


def test_launch_record_rejects_negative_slot() -> None:
    with pytest.raises(ValidationError):
        LaunchRecord(launch_index=0, slot=-1, query="q")


def test_run_statistics_aggregates_outcomes() -> None:
    outcomes = [
        QueryOutcome(launch_index=index, slot=index % 2, query=f"q{index}", status_code=status, elapsed_ms=latency)
        for index, (status, latency) in enumerate([(0, 10.0), (0, 20.0), (-41, 30.0), (0, 40.0)])
    ]

    statistics = RunStatistics.from_outcomes(
        queries_processed=4,
        outcomes=outcomes,
        elapsed_ms=200.0,
        responses_emitted=4,
        peak_in_flight=2,
    )

    assert statistics.queries_completed == 4
    assert statistics.failed_queries == 1
    assert statistics.qps == pytest.approx(20.0)
    assert statistics.latency_p50_ms == pytest.approx(25.0)
    assert statistics.latency_max_ms == pytest.approx(40.0)
    assert statistics.summary_line() == "[done] queries_processed=4 elapsed_ms=200 qps=20.00"


def test_run_statistics_handles_empty_run() -> None:
    statistics = RunStatistics.from_outcomes(queries_processed=0, outcomes=[], elapsed_ms=0.0)

    assert statistics.qps == 0.0
    assert statistics.latency_p95_ms == 0.0
