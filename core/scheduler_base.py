"""
스케줄러 기본 프레임워크 및 이벤트 관리
"""

from typing import List, Dict, Optional
from dataclasses import dataclass
from enum import Enum
from .process import Process, ProcessState

# 시뮬레이션 파라미터 (시간 단위)
TIME_QUANTUM = 10
SIMULATION_HORIZON = 96


class InterruptType(Enum):
    """인터럽트 타입"""
    TIMER = "Timer"  # 타임 퀀텀 종료
    PREEMPTION = "Preemption"  # 선점
    PROCESS_ARRIVAL = "Process Arrival"  # 프로세스 도착
    TERMINATION = "Termination"  # 프로세스 종료


@dataclass
class Event:
    """시뮬레이션 이벤트"""
    time: int
    event_type: InterruptType
    process: Optional[Process] = None
    description: str = ""


@dataclass
class GanttEntry:
    """Gantt Chart 엔트리"""
    pid: str
    start_time: int
    end_time: int
    state: ProcessState


class SchedulerStats:
    """스케줄링 통계"""

    def __init__(self):
        self.total_waiting_time = 0
        self.total_turnaround_time = 0
        self.context_switches = 0
        self.cpu_busy_time = 0
        self.total_simulation_time = 0
        self.process_count = 0

    def calculate_averages(self):
        """평균 계산 (완료된 프로세스 기준)"""
        if self.process_count == 0:
            return {
                'avg_waiting_time': 0,
                'avg_turnaround_time': 0,
                'cpu_utilization': 0,
                'context_switches': self.context_switches,
                'completed': 0
            }

        return {
            'avg_waiting_time': self.total_waiting_time / self.process_count,
            'avg_turnaround_time': self.total_turnaround_time / self.process_count,
            'cpu_utilization': (self.cpu_busy_time / self.total_simulation_time * 100)
                               if self.total_simulation_time > 0 else 0,
            'context_switches': self.context_switches,
            'completed': self.process_count
        }


class BaseScheduler:
    """
    기본 스케줄러 클래스
    이벤트 로그, Gantt Chart, 통계 등 공통 기능 제공
    """

    def __init__(self, processes: List[Process], name: str = "Base Scheduler",
                 horizon: int = SIMULATION_HORIZON):
        self.processes = processes
        self.name = name
        self.horizon = horizon
        self.current_time = 0
        self.running_process: Optional[Process] = None
        self.previous_process: Optional[Process] = None  # 이전 실행 프로세스 추적
        self.terminated_processes: List[Process] = []

        # 현재 실행 구간 시작 시간 (Gantt Chart용)
        self.execution_start: Optional[int] = None

        # Gantt Chart 데이터
        self.gantt_chart: List[GanttEntry] = []

        # 통계
        self.stats = SchedulerStats()

        # 이벤트 로그
        self.event_log: List[str] = []
        self.events: List[Event] = []

    def log_event(self, message: str):
        """이벤트 로그 기록"""
        log_entry = f"[T={self.current_time:3d}] {message}"
        self.event_log.append(log_entry)

    def record_event(self, event_type: InterruptType, process: Optional[Process] = None,
                     description: str = ""):
        """구조화된 이벤트 기록 + 로그"""
        self.events.append(Event(self.current_time, event_type, process, description))
        if description:
            self.log_event(description)

    def add_to_gantt_chart(self, pid: str, start: int, end: int, state: ProcessState):
        """Gantt Chart에 엔트리 추가"""
        if start >= end:  # 유효한 시간 구간만 추가
            return
        last = self.gantt_chart[-1] if self.gantt_chart else None
        if last and last.pid == pid and last.end_time == start and last.state == state:
            # 같은 프로세스가 연속으로 실행되면 하나의 구간으로 병합
            last.end_time = end
        else:
            self.gantt_chart.append(GanttEntry(pid, start, end, state))

    def close_gantt_segment(self):
        """실행 중인 프로세스의 현재 구간을 Gantt Chart에 기록"""
        process = self.running_process
        if process is not None and self.execution_start is not None:
            # 완료된 프로세스는 완료 시점까지만 기록
            end = process.finish_time if process.finish_time is not None else self.current_time
            self.add_to_gantt_chart(process.pid, self.execution_start, end, ProcessState.RUNNING)
        self.execution_start = None

    def dispatch(self, process: Optional[Process]):
        """
        Running 슬롯 교체 (문맥 전환)

        Args:
            process: 새로 실행할 프로세스 (None이면 CPU 유휴 상태)
        """
        self.close_gantt_segment()

        # 문맥 전환 카운팅: 이전에 실행된 프로세스와 다른 프로세스가 실행될 때만
        if self.previous_process is not None and process is not None:
            if self.previous_process is not process:
                self.stats.context_switches += 1
                self.log_event(f"Context Switch: {self.previous_process.pid} → {process.pid}")

        if process is not None:
            self.previous_process = process

        self.running_process = process

        if process:
            process.state = ProcessState.RUNNING
            if process.start_time is None:
                process.start_time = self.current_time
            self.execution_start = self.current_time
            self.log_event(f"{process.pid} → Running")

    def terminate_process(self, process: Process):
        """프로세스 종료 처리"""
        process.state = ProcessState.TERMINATED
        if process.finish_time is None:
            process.finish_time = self.current_time

        self.terminated_processes.append(process)
        self.record_event(InterruptType.TERMINATION, process,
                          f"{process.pid} → Terminated (WT={process.wait}, TT={process.turnaround})")

    def update_statistics(self):
        """최종 통계 업데이트"""
        self.stats.total_simulation_time = self.current_time
        self.stats.process_count = len(self.terminated_processes)
        self.stats.total_waiting_time = sum(p.wait for p in self.terminated_processes)
        self.stats.total_turnaround_time = sum(p.turnaround for p in self.terminated_processes)

    def is_simulation_complete(self) -> bool:
        """시뮬레이션 완료 여부 확인 (고정된 시간 범위 기준)"""
        return self.current_time >= self.horizon

    def get_current_snapshot(self) -> Dict:
        """
        현재 시뮬레이션 상태 스냅샷 반환 (실시간 뷰어용)

        Returns:
            현재 상태 딕셔너리
        """
        raise NotImplementedError("Subclasses must implement get_current_snapshot()")

    def execute_one_step(self) -> bool:
        """
        한 시간 단위 실행 (하위 클래스에서 구현)

        Returns:
            시뮬레이션 완료 여부
        """
        raise NotImplementedError("Subclasses must implement execute_one_step()")

    def run(self, verbose: bool = False) -> Dict:
        """
        스케줄링 시뮬레이션 실행

        Args:
            verbose: 상세 로그 출력 여부

        Returns:
            시뮬레이션 결과 딕셔너리
        """
        self.log_event(f"===== {self.name} Scheduling Started =====")

        while not self.is_simulation_complete():
            self.execute_one_step()

        self.close_gantt_segment()
        self.log_event(f"===== {self.name} Scheduling Completed =====")

        if verbose:
            for log in self.event_log:
                print(log)

        return self.get_results()

    def get_results(self) -> Dict:
        """
        시뮬레이션 결과 반환

        Returns:
            결과 딕셔너리 (통계, Gantt Chart, 로그 등)
        """
        self.update_statistics()

        return {
            'algorithm': self.name,
            'horizon': self.horizon,
            'statistics': self.stats.calculate_averages(),
            'gantt_chart': self.gantt_chart,
            'event_log': self.event_log,
            'processes': self.processes
        }
