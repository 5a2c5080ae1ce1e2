"""
Ready 큐: 우선순위 + 라운드 로빈 삽입 정책
"""

from collections import deque
from typing import Deque, Iterator, List, Optional
from .process import Process, ProcessState


class ReadyQueue:
    """
    우선순위 내림차순으로 정렬된 Ready 큐

    같은 우선순위 그룹 안에서는
    - 새로 도착했거나 타임 퀀텀을 모두 사용한 프로세스(quantum == 0)는 그룹의 맨 뒤에,
    - 슬라이스 도중 선점된 프로세스(quantum != 0)는 그룹의 맨 앞에 삽입된다.
    """

    def __init__(self, time_quantum: int):
        self.time_quantum = time_quantum
        self._queue: Deque[Process] = deque()

    def insert(self, process: Process):
        """
        프로세스를 정책에 맞는 위치에 삽입

        Args:
            process: 삽입할 프로세스 (종료되지 않았고 실행 중이 아닌 상태)
        """
        assert not process.is_terminated(), f"{process.pid} is terminated"
        assert process not in self._queue, f"{process.pid} is already queued"

        # 퀀텀을 다 쓴 프로세스는 새 슬라이스로 시작
        if process.quantum >= self.time_quantum:
            process.quantum = 0

        preempted = process.quantum != 0
        index = len(self._queue)
        for i, queued in enumerate(self._queue):
            if queued.priority < process.priority:
                index = i
                break
            if preempted and queued.priority == process.priority:
                index = i
                break

        process.state = ProcessState.READY
        self._queue.insert(index, process)

    def pop_front(self) -> Optional[Process]:
        """가장 앞의 (우선순위가 가장 높은) 프로세스를 꺼냄"""
        if not self._queue:
            return None
        return self._queue.popleft()

    def peek(self) -> Optional[Process]:
        return self._queue[0] if self._queue else None

    def pids(self) -> List[str]:
        return [p.pid for p in self._queue]

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)

    def __iter__(self) -> Iterator[Process]:
        return iter(self._queue)

    def __contains__(self, process: Process) -> bool:
        return any(p is process for p in self._queue)

    def __repr__(self):
        return f"ReadyQueue({self.pids()})"
