"""
우선순위 + 라운드 로빈 스케줄러 시뮬레이터 - FastAPI 백엔드
"""

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Optional, Dict
import asyncio
import json
import sys
import os

# 상위 디렉토리의 모듈 import를 위한 경로 추가
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from core.process import Process
from core.scheduler_base import TIME_QUANTUM, SIMULATION_HORIZON
from schedulers import PriorityRoundRobinScheduler

app = FastAPI(
    title="Priority Round Robin Scheduler Simulator",
    description="선점형 우선순위 + 라운드 로빈 CPU 스케줄링 시뮬레이터",
    version="1.0.0"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Pydantic 모델
class ProcessInput(BaseModel):
    pid: str
    priority: int
    burst: int = Field(gt=0)
    arrival_time: int = Field(ge=0)


class SimulationRequest(BaseModel):
    processes: List[ProcessInput]
    time_quantum: int = Field(default=TIME_QUANTUM, ge=1)
    horizon: int = Field(default=SIMULATION_HORIZON, ge=0)


class GanttEntry(BaseModel):
    pid: str
    start_time: int
    end_time: int
    state: str


class ProcessResult(BaseModel):
    pid: str
    priority: int
    burst: int
    arrival_time: int
    turnaround_time: int
    waiting_time: int
    remaining: int
    state: str
    start_time: Optional[int]
    finish_time: Optional[int]


class SimulationResult(BaseModel):
    algorithm: str
    time_quantum: int
    horizon: int
    gantt_chart: List[GanttEntry]
    processes: List[ProcessResult]
    statistics: Dict[str, float]
    event_log: List[str]


def create_process_objects(process_inputs: List[ProcessInput]) -> List[Process]:
    """ProcessInput을 Process 객체로 변환 (입력 순서 유지)"""
    pids = [p.pid for p in process_inputs]
    if len(set(pids)) != len(pids):
        raise ValueError("Process ids must be unique")

    return [
        Process(
            pid=p.pid,
            priority=p.priority,
            burst=p.burst,
            arrival_time=p.arrival_time
        )
        for p in process_inputs
    ]


def serialize_gantt(entries) -> List[Dict]:
    return [
        {
            'pid': entry.pid,
            'start_time': entry.start_time,
            'end_time': entry.end_time,
            'state': entry.state.value
        }
        for entry in entries
    ]


def serialize_process(p: Process) -> Dict:
    return {
        'pid': p.pid,
        'priority': p.priority,
        'burst': p.burst,
        'arrival_time': p.arrival_time,
        'turnaround_time': p.turnaround,
        'waiting_time': p.wait,
        'remaining': p.remaining,
        'state': p.state.value,
        'start_time': p.start_time,
        'finish_time': p.finish_time
    }


def run_scheduler(processes: List[Process], time_quantum: int = TIME_QUANTUM,
                  horizon: int = SIMULATION_HORIZON) -> Dict:
    """스케줄러 실행 및 결과 반환"""
    scheduler = PriorityRoundRobinScheduler(processes, time_quantum=time_quantum, horizon=horizon)
    result = scheduler.run()

    return {
        'algorithm': result['algorithm'],
        'time_quantum': result['time_quantum'],
        'horizon': result['horizon'],
        'gantt_chart': serialize_gantt(result['gantt_chart']),
        'processes': [serialize_process(p) for p in result['processes']],
        'statistics': result['statistics'],
        'event_log': result['event_log']
    }


@app.get("/")
async def root():
    return {"message": "Priority Round Robin Scheduler Simulator API", "version": "1.0.0",
            "time_quantum": TIME_QUANTUM, "horizon": SIMULATION_HORIZON}


@app.post("/simulate", response_model=SimulationResult)
async def simulate(request: SimulationRequest):
    """스케줄링 시뮬레이션 실행"""
    try:
        processes = create_process_objects(request.processes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return run_scheduler(processes, request.time_quantum, request.horizon)


# WebSocket을 통한 실시간 시뮬레이션
class RealtimeSimulator:
    def __init__(self, processes: List[Process], time_quantum: int = TIME_QUANTUM,
                 horizon: int = SIMULATION_HORIZON):
        self.scheduler = PriorityRoundRobinScheduler(processes, time_quantum=time_quantum,
                                                     horizon=horizon)
        self.is_complete = False
        self.last_gantt_index = 0
        self.last_log_index = 0

    def step(self) -> Dict:
        """한 스텝 실행 및 상태 반환"""
        if self.is_complete:
            return {'complete': True}

        is_complete = self.scheduler.execute_one_step()
        if is_complete:
            self.scheduler.close_gantt_segment()

        # 새로운 Gantt 엔트리 (마지막 엔트리는 병합으로 늘어날 수 있으므로 다시 전송)
        gantt = self.scheduler.gantt_chart
        start = max(self.last_gantt_index - 1, 0)
        new_gantt = serialize_gantt(gantt[start:])
        self.last_gantt_index = len(gantt)

        # 새로운 로그
        new_logs = self.scheduler.event_log[self.last_log_index:]
        self.last_log_index = len(self.scheduler.event_log)

        snapshot = self.scheduler.get_current_snapshot()
        running = snapshot['running']
        stats = {
            'current_time': snapshot['time'],
            'context_switches': snapshot['context_switches'],
            'cpu_busy_time': snapshot['cpu_busy_time'],
            'completed': len(snapshot['terminated']),
            'total': len(self.scheduler.processes)
        }

        if is_complete:
            self.is_complete = True
            self.scheduler.update_statistics()
            stats['final'] = self.scheduler.stats.calculate_averages()

        return {
            'complete': is_complete,
            'running': {
                'pid': running.pid,
                'remaining': running.remaining,
                'quantum': running.quantum,
                'priority': running.priority
            } if running else None,
            'ready_queue': [
                {'pid': p.pid, 'remaining': p.remaining, 'priority': p.priority}
                for p in snapshot['ready_queue']
            ],
            'new_gantt': new_gantt,
            'new_logs': new_logs,
            'stats': stats
        }


@app.websocket("/ws/realtime")
async def websocket_realtime(websocket: WebSocket):
    """실시간 시뮬레이션 WebSocket 엔드포인트"""
    await websocket.accept()
    simulator = None

    try:
        while True:
            data = await websocket.receive_text()
            message = json.loads(data)

            action = message.get('action')

            if action == 'init':
                request = SimulationRequest(**message)
                simulator = RealtimeSimulator(
                    create_process_objects(request.processes),
                    request.time_quantum,
                    request.horizon
                )

                await websocket.send_json({
                    'type': 'initialized',
                    'process_count': len(request.processes),
                    'time_quantum': request.time_quantum,
                    'horizon': request.horizon
                })

            elif action == 'step':
                if simulator:
                    await websocket.send_json({'type': 'step_result', **simulator.step()})

            elif action == 'run':
                # 자동 실행 (속도 조절 가능)
                if simulator:
                    speed = message.get('speed', 1.0)
                    if not isinstance(speed, (int, float)) or speed <= 0:
                        await websocket.send_json({'type': 'error',
                                                   'message': f"speed must be positive: {speed}"})
                        continue
                    delay = 1.0 / speed

                    while not simulator.is_complete:
                        result = simulator.step()
                        await websocket.send_json({'type': 'step_result', **result})

                        if result['complete']:
                            break

                        await asyncio.sleep(delay)

            else:
                await websocket.send_json({'type': 'error', 'message': f"Unknown action: {action}"})

    except WebSocketDisconnect:
        pass
    except ValueError as e:
        await websocket.send_json({'type': 'error', 'message': str(e)})


@app.get("/sample-processes")
async def get_sample_processes():
    """샘플 프로세스 데이터 반환"""
    return {
        "samples": [
            {
                "name": "선점 (2개 프로세스)",
                "processes": [
                    {"pid": "A", "priority": 1, "burst": 20, "arrival_time": 0},
                    {"pid": "B", "priority": 5, "burst": 3, "arrival_time": 2}
                ]
            },
            {
                "name": "라운드 로빈 (같은 우선순위)",
                "processes": [
                    {"pid": "P1", "priority": 3, "burst": 15, "arrival_time": 0},
                    {"pid": "P2", "priority": 3, "burst": 15, "arrival_time": 0}
                ]
            },
            {
                "name": "혼합 (6개 프로세스)",
                "processes": [
                    {"pid": "P1", "priority": 8, "burst": 15, "arrival_time": 0},
                    {"pid": "P2", "priority": 3, "burst": 20, "arrival_time": 0},
                    {"pid": "P3", "priority": 4, "burst": 20, "arrival_time": 20},
                    {"pid": "P4", "priority": 4, "burst": 20, "arrival_time": 25},
                    {"pid": "P5", "priority": 5, "burst": 5, "arrival_time": 45},
                    {"pid": "P6", "priority": 5, "burst": 15, "arrival_time": 55}
                ]
            }
        ]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
