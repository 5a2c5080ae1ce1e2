"""
선점형 우선순위 스케줄링 + 같은 우선순위 간 라운드 로빈
- 높은 우선순위 프로세스가 도착하면 즉시 선점
- 같은 우선순위 프로세스는 타임 퀀텀 단위로 번갈아 실행
- 슬라이스 도중 선점된 프로세스는 같은 우선순위 그룹의 맨 앞으로 복귀
"""

from typing import List, Dict
from core.process import Process, create_process_copy
from core.ready_queue import ReadyQueue
from core.scheduler_base import (BaseScheduler, InterruptType,
                                 TIME_QUANTUM, SIMULATION_HORIZON)


class PriorityRoundRobinScheduler(BaseScheduler):
    """
    우선순위 + 라운드 로빈 스케줄러 (선점형)
    우선순위 값이 클수록 높은 우선순위

    매 시간 단위마다:
    1. 이번 시간에 도착한 프로세스를 입력 순서대로 처리 (선점 판단)
    2. 도착한 프로세스가 없으면 실행 중인 프로세스의 완료/퀀텀 만료 검사
    3. 카운터 갱신 (실행 중: 퀀텀/남은 시간/반환 시간, Ready 큐: 대기/반환 시간)
    """

    def __init__(self, processes: List[Process], time_quantum: int = TIME_QUANTUM,
                 horizon: int = SIMULATION_HORIZON):
        super().__init__([create_process_copy(p) for p in processes],
                         f"Priority + Round Robin (Q={time_quantum})", horizon)
        self.time_quantum = time_quantum
        self.ready_queue = ReadyQueue(time_quantum)

    def handle_arrival(self, process: Process):
        """
        도착한 프로세스 처리: 선점 여부 판단 후 Running 또는 Ready 큐로 배치

        Args:
            process: 이번 시간에 도착한 프로세스
        """
        self.record_event(InterruptType.PROCESS_ARRIVAL, process,
                          f"{process.pid} arrived (priority={process.priority}, burst={process.burst})")
        running = self.running_process

        if running is None:
            self.dispatch(process)

        elif process.priority > running.priority:
            if running.remaining <= 0:
                # 이번 시간에 막 끝났지만 아직 회수되지 않은 프로세스는 버림
                self.terminate_process(running)
            else:
                self.record_event(InterruptType.PREEMPTION, running,
                                  f"{running.pid} preempted by {process.pid} "
                                  f"(quantum={running.quantum}) → Ready Queue")
                self.ready_queue.insert(running)
            self.dispatch(process)

        else:
            self.ready_queue.insert(process)
            self.log_event(f"{process.pid} → Ready Queue {self.ready_queue.pids()}")

    def check_quantum_or_completion(self):
        """실행 중인 프로세스의 완료 또는 타임 퀀텀 만료 검사"""
        running = self.running_process
        if running is None:
            return

        if running.is_completed():
            self.terminate_process(running)
            self.dispatch(self.ready_queue.pop_front())

        elif running.quantum == self.time_quantum:
            self.record_event(InterruptType.TIMER, running,
                              f"{running.pid} time quantum expired → Ready Queue")
            self.ready_queue.insert(running)
            self.dispatch(self.ready_queue.pop_front())

    def advance(self):
        """한 시간 단위 카운터 갱신"""
        running = self.running_process
        if running is not None and not running.is_completed():
            running.execute()
            self.stats.cpu_busy_time += 1
            if running.is_completed():
                running.finish_time = self.current_time + 1

        for process in self.ready_queue:
            process.wait_one_tick()

    def execute_one_step(self) -> bool:
        """
        한 시간 단위 실행 (실시간 뷰어용)

        Returns:
            시뮬레이션 완료 여부
        """
        if self.is_simulation_complete():
            return True

        # 1. 프로세스 도착 처리 (입력 순서대로)
        arrived = False
        for process in self.processes:
            if process.arrival_time == self.current_time:
                arrived = True
                self.handle_arrival(process)

        # 2. 도착이 없을 때만 완료/퀀텀 검사
        if not arrived:
            self.check_quantum_or_completion()

        # 3. 카운터 갱신
        self.advance()

        self.current_time += 1
        return self.is_simulation_complete()

    def get_current_snapshot(self) -> Dict:
        running = self.running_process
        return {
            'time': self.current_time,
            'running': running,
            'ready_queue': list(self.ready_queue),
            'terminated': list(self.terminated_processes),
            'context_switches': self.stats.context_switches,
            'cpu_busy_time': self.stats.cpu_busy_time,
            'latest_gantt_entry': self.gantt_chart[-1] if self.gantt_chart else None,
            'latest_log': self.event_log[-1] if self.event_log else ""
        }

    def get_results(self) -> Dict:
        results = super().get_results()
        results['time_quantum'] = self.time_quantum
        return results
