"""
Core modules for the priority / round-robin scheduling simulator
"""

from .process import Process, ProcessState, create_process_copy
from .ready_queue import ReadyQueue
from .scheduler_base import (BaseScheduler, SchedulerStats, GanttEntry, InterruptType, Event,
                             TIME_QUANTUM, SIMULATION_HORIZON)

__all__ = [
    'Process',
    'ProcessState',
    'create_process_copy',
    'ReadyQueue',
    'BaseScheduler',
    'SchedulerStats',
    'GanttEntry',
    'InterruptType',
    'Event',
    'TIME_QUANTUM',
    'SIMULATION_HORIZON'
]
