"""
프로세스 및 PCB (Process Control Block) 관리 모듈
"""

from enum import Enum
from typing import Optional
from copy import deepcopy


class ProcessState(Enum):
    """프로세스 상태"""
    NEW = "New"
    READY = "Ready"
    RUNNING = "Running"
    TERMINATED = "Terminated"


class Process:
    """
    프로세스 제어 블록 (PCB)
    각 프로세스의 정적 정보와 시뮬레이션 중 변하는 카운터를 관리
    """

    def __init__(self, pid: str, priority: int, burst: int, arrival_time: int):
        """
        프로세스 초기화

        Args:
            pid: 프로세스 ID (문자열, 유일)
            priority: 우선순위 (클수록 높은 우선순위)
            burst: 총 CPU 버스트 시간
            arrival_time: 도착 시간
        """
        self.pid = pid
        self.priority = priority
        self.burst = burst
        self.arrival_time = arrival_time

        # 실행 상태 추적
        self.state = ProcessState.NEW
        self.remaining = burst  # 남은 CPU 시간
        self.quantum = 0  # 현재 라운드 로빈 슬라이스에서 사용한 시간

        # 통계 정보
        self.turnaround = 0  # 도착 이후 시스템에 머문 시간
        self.wait = 0  # Ready 큐에서 대기한 시간
        self.start_time: Optional[int] = None  # 첫 실행 시간
        self.finish_time: Optional[int] = None  # 완료 시간

    def execute(self):
        """CPU에서 한 시간 단위 실행"""
        assert self.remaining > 0, f"{self.pid}: remaining time would become negative"
        self.quantum += 1
        self.remaining -= 1
        self.turnaround += 1

    def wait_one_tick(self):
        """Ready 큐에서 한 시간 단위 대기"""
        self.wait += 1
        self.turnaround += 1

    def is_completed(self) -> bool:
        """프로세스가 완료되었는지 확인"""
        return self.remaining <= 0

    def is_terminated(self) -> bool:
        return self.state == ProcessState.TERMINATED

    def __repr__(self):
        return f"{self.pid}[{self.state.value}]"

    def __str__(self):
        return f"Process {self.pid}: State={self.state.value}, Priority={self.priority}, " \
               f"Remaining={self.remaining}, Quantum={self.quantum}"


def create_process_copy(process: Process) -> Process:
    """
    프로세스의 깊은 복사본 생성
    같은 입력으로 시뮬레이션을 여러 번 독립적으로 수행하기 위함
    """
    return deepcopy(process)
