"""
CPU Scheduling Algorithms
"""

from .priority_rr import PriorityRoundRobinScheduler

__all__ = [
    'PriorityRoundRobinScheduler'
]
