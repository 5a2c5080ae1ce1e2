import random

import pytest

from core.process import Process, ProcessState
from core.scheduler_base import InterruptType, TIME_QUANTUM, SIMULATION_HORIZON
from schedulers.priority_rr import PriorityRoundRobinScheduler


def simulate(processes, **kwargs):
    scheduler = PriorityRoundRobinScheduler(processes, **kwargs)
    result = scheduler.run()
    return scheduler, {p.pid: (p.turnaround, p.wait) for p in result['processes']}


def find(scheduler, pid):
    return next(p for p in scheduler.processes if p.pid == pid)


def test_defaults():
    scheduler = PriorityRoundRobinScheduler([])
    assert scheduler.time_quantum == TIME_QUANTUM == 10
    assert scheduler.horizon == SIMULATION_HORIZON == 96


def test_single_process_runs_uninterrupted():
    scheduler, times = simulate([Process("P1", 1, 5, 0)])
    assert times == {"P1": (5, 0)}
    p = find(scheduler, "P1")
    assert p.state == ProcessState.TERMINATED
    assert (p.start_time, p.finish_time) == (0, 5)
    assert [(e.pid, e.start_time, e.end_time) for e in scheduler.gantt_chart] == [("P1", 0, 5)]


def test_higher_priority_arrival_preempts():
    scheduler, times = simulate([Process("A", 1, 20, 0), Process("B", 5, 3, 2)])
    assert times["B"] == (3, 0)
    assert times["A"] == (23, 3)
    assert [(e.pid, e.start_time, e.end_time) for e in scheduler.gantt_chart] == [
        ("A", 0, 2), ("B", 2, 5), ("A", 5, 23)]
    preemptions = [e for e in scheduler.events if e.event_type == InterruptType.PREEMPTION]
    assert [(e.time, e.process.pid) for e in preemptions] == [(2, "A")]


def test_preempted_process_keeps_its_slice_position():
    scheduler = PriorityRoundRobinScheduler([Process("A", 1, 20, 0), Process("B", 5, 3, 2)])
    for _ in range(3):
        scheduler.execute_one_step()
    a = find(scheduler, "A")
    assert scheduler.running_process.pid == "B"
    assert scheduler.ready_queue.pids() == ["A"]
    assert a.quantum == 2


def test_preempted_process_is_ahead_of_waiting_peers():
    scheduler = PriorityRoundRobinScheduler([
        Process("A", 1, 30, 0),
        Process("B", 1, 30, 1),
        Process("C", 5, 2, 3),
    ])
    for _ in range(4):
        scheduler.execute_one_step()
    assert scheduler.running_process.pid == "C"
    assert scheduler.ready_queue.pids() == ["A", "B"]
    assert find(scheduler, "A").quantum == 3

    # C finishes after t=4, A resumes at t=5 with its remaining slice
    scheduler.execute_one_step()
    scheduler.execute_one_step()
    assert scheduler.running_process.pid == "A"
    assert find(scheduler, "A").quantum == 4


def test_equal_priority_round_robin():
    scheduler, times = simulate([Process("X", 2, 15, 0), Process("Y", 2, 15, 0)])
    assert [(e.pid, e.start_time, e.end_time) for e in scheduler.gantt_chart] == [
        ("X", 0, 10), ("Y", 10, 20), ("X", 20, 25), ("Y", 25, 30)]
    assert times == {"X": (25, 10), "Y": (30, 15)}


def test_exhausted_slice_goes_to_back_with_reset_quantum():
    scheduler = PriorityRoundRobinScheduler([
        Process("X", 2, 15, 0), Process("Y", 2, 15, 0), Process("Z", 2, 15, 0)])
    for _ in range(11):
        scheduler.execute_one_step()
    x = find(scheduler, "X")
    assert scheduler.running_process.pid == "Y"
    assert scheduler.ready_queue.pids() == ["Z", "X"]
    assert x.quantum == 0
    timers = [e for e in scheduler.events if e.event_type == InterruptType.TIMER]
    assert [(e.time, e.process.pid) for e in timers] == [(10, "X")]


def test_lone_process_keeps_running_after_quantum_expires():
    scheduler, times = simulate([Process("P1", 1, 25, 0)])
    assert times == {"P1": (25, 0)}
    assert scheduler.stats.context_switches == 0
    assert [(e.pid, e.start_time, e.end_time) for e in scheduler.gantt_chart] == [("P1", 0, 25)]


def test_finished_process_is_discarded_when_higher_priority_arrives():
    scheduler, times = simulate([Process("L", 1, 3, 0), Process("H", 5, 2, 3)])
    assert times == {"L": (3, 0), "H": (2, 0)}
    l = find(scheduler, "L")
    assert l.state == ProcessState.TERMINATED
    assert l.finish_time == 3
    assert not [e for e in scheduler.events if e.event_type == InterruptType.PREEMPTION]


def test_finished_process_is_reaped_on_next_check_after_lower_priority_arrival():
    scheduler, times = simulate([Process("H", 5, 3, 0), Process("L", 1, 2, 3)])
    # L waits one tick while H is reaped
    assert times == {"H": (3, 0), "L": (3, 1)}
    assert find(scheduler, "L").start_time == 4


def test_quantum_passed_on_arrival_ticks_never_expires():
    scheduler, times = simulate([
        Process("X", 5, 30, 0),
        Process("Y", 5, 5, 0),
        Process("L1", 1, 1, 10),
        Process("L2", 1, 1, 11),
    ])
    # X reaches Q=10 while L1 and L2 arrive, so the timer check misses it
    x = find(scheduler, "X")
    y = find(scheduler, "Y")
    assert x.finish_time == 30
    assert y.start_time == 30
    assert times["X"] == (30, 0)
    assert times["Y"] == (35, 30)
    assert times["L1"] == (26, 25)
    assert times["L2"] == (26, 25)
    assert not [e for e in scheduler.events if e.event_type == InterruptType.TIMER]


def test_single_arrival_on_expiry_tick_skips_the_timer():
    scheduler, times = simulate([
        Process("X", 3, 15, 0), Process("Y", 3, 5, 0), Process("L", 1, 1, 10)])
    assert [(e.pid, e.start_time, e.end_time) for e in scheduler.gantt_chart] == [
        ("X", 0, 15), ("Y", 15, 20), ("L", 20, 21)]
    assert times == {"X": (15, 0), "Y": (20, 15), "L": (11, 10)}


def test_same_tick_arrivals_are_handled_in_input_order():
    scheduler = PriorityRoundRobinScheduler([
        Process("A", 1, 10, 0), Process("B", 3, 10, 0), Process("C", 3, 10, 0)])
    scheduler.execute_one_step()
    # A admitted first, then preempted by B (quantum 0 -> back of its class), C queued
    assert scheduler.running_process.pid == "B"
    assert scheduler.ready_queue.pids() == ["C", "A"]


def test_simulation_stops_at_horizon():
    scheduler, times = simulate([Process("LONG", 1, 200, 0), Process("LATE", 9, 5, 120)])
    long_ = find(scheduler, "LONG")
    late = find(scheduler, "LATE")
    assert times["LONG"] == (96, 0)
    assert long_.remaining == 104
    assert long_.state == ProcessState.RUNNING
    assert late.state == ProcessState.NEW
    assert times["LATE"] == (0, 0)
    assert scheduler.terminated_processes == []
    assert scheduler.execute_one_step() is True


def test_custom_quantum_and_horizon():
    scheduler, times = simulate([Process("X", 2, 6, 0), Process("Y", 2, 6, 0)],
                                time_quantum=3, horizon=10)
    assert [(e.pid, e.start_time, e.end_time) for e in scheduler.gantt_chart] == [
        ("X", 0, 3), ("Y", 3, 6), ("X", 6, 9), ("Y", 9, 10)]
    # Y is still running when the horizon is reached
    assert times == {"X": (9, 3), "Y": (10, 6)}
    assert find(scheduler, "Y").remaining == 2


def test_sample_workload(sample_processes):
    scheduler, times = simulate(sample_processes)
    assert times == {
        "P1": (15, 0),
        "P2": (95, 75),
        "P3": (35, 15),
        "P4": (55, 35),
        "P5": (5, 0),
        "P6": (15, 0),
    }
    assert scheduler.stats.context_switches == 9
    assert scheduler.stats.cpu_busy_time == 95
    preemptions = [e for e in scheduler.events if e.event_type == InterruptType.PREEMPTION]
    assert [(e.time, e.process.pid) for e in preemptions] == [(20, "P2"), (45, "P3")]


def test_results_keep_input_order_and_do_not_touch_input(sample_processes):
    scheduler = PriorityRoundRobinScheduler(sample_processes)
    result = scheduler.run()
    assert [p.pid for p in result['processes']] == ["P1", "P2", "P3", "P4", "P5", "P6"]
    assert all(p.remaining == p.burst for p in sample_processes)
    assert result['time_quantum'] == 10
    assert result['horizon'] == 96
    assert result['statistics']['completed'] == 6
    assert result['statistics']['avg_turnaround_time'] == pytest.approx(220 / 6)
    assert result['statistics']['avg_waiting_time'] == pytest.approx(125 / 6)


def test_verbose_run_prints_event_log(capsys):
    PriorityRoundRobinScheduler([Process("P1", 1, 2, 0)]).run(verbose=True)
    out = capsys.readouterr().out
    assert "[T=  0] P1 arrived" in out
    assert "P1 → Terminated (WT=0, TT=2)" in out


def random_workload(seed, count=12):
    rng = random.Random(seed)
    return [
        Process(f"P{i}", rng.randint(1, 4), rng.randint(1, 25), rng.randint(0, 60))
        for i in range(count)
    ]


@pytest.mark.parametrize("seed", range(10))
def test_invariants_hold_every_tick(seed):
    scheduler = PriorityRoundRobinScheduler(random_workload(seed))
    previous = {p.pid: (p.wait, p.turnaround, p.remaining) for p in scheduler.processes}
    finished = set()

    while not scheduler.execute_one_step():
        queue = list(scheduler.ready_queue)
        running = scheduler.running_process

        priorities = [p.priority for p in queue]
        assert priorities == sorted(priorities, reverse=True)

        if running is not None:
            assert running not in scheduler.ready_queue
            assert running.state == ProcessState.RUNNING

        for p in queue:
            assert 0 <= p.quantum < scheduler.time_quantum
            assert p.state == ProcessState.READY

        for p in scheduler.processes:
            wait, turnaround, remaining = previous[p.pid]
            assert p.wait >= wait
            assert p.turnaround >= turnaround
            assert 0 <= p.remaining <= remaining
            if p.pid in finished:
                assert (p.wait, p.turnaround) == (wait, turnaround)
                assert p not in scheduler.ready_queue
                assert p is not running or p.remaining == 0
            if p.remaining == 0:
                finished.add(p.pid)
            previous[p.pid] = (p.wait, p.turnaround, p.remaining)

        for p in scheduler.terminated_processes:
            assert p is not running
            assert p not in scheduler.ready_queue

    for p in scheduler.processes:
        if p.state == ProcessState.TERMINATED:
            assert p.turnaround - p.wait == p.burst
