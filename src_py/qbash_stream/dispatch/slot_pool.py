"""
목적:
- 고정 크기 질의 스트림 슬롯의 점유 상태를 관리한다.

설명:
- 슬롯은 [0, N) 정수 인덱스로 식별되며 FREE -> OCCUPIED -> FREE 로만 전이한다.
- 점유 중인 슬롯은 실행 중 작업 핸들(`asyncio.Future` 호환 객체)을 보유한다.
- 완료 확인은 `done()` 조회만 사용하며 절대 대기하지 않는다.
- 풀 상태는 디스패처 스레드(이벤트 루프)에서만 변경되므로 잠금을 두지 않는다.

디자인 패턴:
- 레지스트리(Registry).

참조:
- src_py/qbash_stream/dispatch/dispatcher.py
"""

from __future__ import annotations

from typing import Protocol

from qbash_stream.exceptions import SlotStateError


class TaskHandle(Protocol):
    def done(self) -> bool: ...


class SlotPool:
    """질의 스트림 슬롯 레지스트리."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("슬롯 풀 크기는 1 이상이어야 합니다")
        self._handles: list[TaskHandle | None] = [None] * size
        self._occupied_count = 0
        self._peak_occupied = 0

    @property
    def size(self) -> int:
        return len(self._handles)

    @property
    def occupied_count(self) -> int:
        return self._occupied_count

    @property
    def peak_occupied(self) -> int:
        """실행 이후 동시에 점유된 슬롯 수의 최댓값."""
        return self._peak_occupied

    def is_occupied(self, index: int) -> bool:
        return self._handles[index] is not None

    def find_free_slot(self) -> int | None:
        """가장 앞쪽의 빈 슬롯 인덱스를 반환한다. 모두 점유 중이면 None."""
        for index, handle in enumerate(self._handles):
            if handle is None:
                return index
        return None

    def mark_occupied(self, index: int, handle: TaskHandle) -> None:
        """빈 슬롯에 작업 핸들을 기록한다."""
        if self._handles[index] is not None:
            raise SlotStateError(f"이미 점유된 슬롯입니다: slot={index}")

        self._handles[index] = handle
        self._occupied_count += 1
        self._peak_occupied = max(self._peak_occupied, self._occupied_count)

    def poll_and_release(self, index: int) -> bool:
        """슬롯 작업이 끝났으면 슬롯을 비우고 True를 반환한다."""
        handle = self._handles[index]
        if handle is None or not handle.done():
            return False

        self._handles[index] = None
        self._occupied_count -= 1
        return True

    def occupied_slots(self) -> list[int]:
        return [index for index, handle in enumerate(self._handles) if handle is not None]

    def handles(self) -> list[TaskHandle]:
        return [handle for handle in self._handles if handle is not None]

    def is_drained(self) -> bool:
        return self._occupied_count == 0
