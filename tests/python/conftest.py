import random
import threading
import time

import pytest

ENVIRONMENT_HANDLE = "env-handle"


class EchoEngine:
    """`ECHO:<query>`를 임의 지연 뒤 콜백으로 돌려주는 가짜 엔진."""

    def __init__(
        self,
        *,
        init_error: int = 0,
        status_for: dict[str, int] | None = None,
        raise_for: set[str] | None = None,
        response_for: dict[str, str] | None = None,
        delay_range: tuple[float, float] = (0.0, 0.01),
        seed: int = 7,
    ) -> None:
        self.init_error = init_error
        self.status_for = status_for or {}
        self.raise_for = raise_for or set()
        self.response_for = response_for or {}
        self.delay_range = delay_range
        self.initialized_with: list[str] = []
        self.deinitialized: list[object] = []
        self.calls: list[str] = []
        self.max_active = 0
        self._active = 0
        self._lock = threading.Lock()
        self._random = random.Random(seed)

    def initialize(self, file_list: str) -> tuple[object, int]:
        self.initialized_with.append(file_list)
        return ENVIRONMENT_HANDLE, self.init_error

    def execute_query_async(self, query, environment, on_response) -> int:
        assert environment == ENVIRONMENT_HANDLE
        with self._lock:
            self.calls.append(query)
            self._active += 1
            self.max_active = max(self.max_active, self._active)
            delay = self._random.uniform(*self.delay_range)

        try:
            time.sleep(delay)
            if query in self.raise_for:
                raise RuntimeError(f"engine exploded on {query}")
            on_response(self.response_for.get(query, f"ECHO:{query}"))
        finally:
            with self._lock:
                self._active -= 1

        return self.status_for.get(query, 0)

    def deinitialize(self, environment) -> None:
        self.deinitialized.append(environment)


class GatedEngine(EchoEngine):
    """`gate`가 열릴 때까지 모든 질의를 붙잡아 두는 가짜 엔진."""

    def __init__(self) -> None:
        super().__init__(delay_range=(0.0, 0.0))
        self.gate = threading.Event()

    def execute_query_async(self, query, environment, on_response) -> int:
        self.gate.wait(timeout=5)
        return super().execute_query_async(query, environment, on_response)


@pytest.fixture
def echo_engine() -> EchoEngine:
    return EchoEngine()


@pytest.fixture
def gated_engine():
    engine = GatedEngine()
    yield engine
    engine.gate.set()
