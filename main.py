#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
우선순위 + 라운드 로빈 스케줄러 시뮬레이터 - 메인 실행 파일
"""

import argparse
import os
import sys

from core.scheduler_base import TIME_QUANTUM, SIMULATION_HORIZON
from schedulers.priority_rr import PriorityRoundRobinScheduler
from utils.input_parser import InputParser, MalformedRecordError
from utils.visualization import Visualizer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="선점형 우선순위 + 라운드 로빈 CPU 스케줄링 시뮬레이터")
    parser.add_argument("input_file", help="프로세스 데이터 파일 (Process/Priority/Burst/Arrival, 탭 구분)")
    parser.add_argument("-q", "--quantum", type=int, default=TIME_QUANTUM,
                        help=f"타임 퀀텀 (기본값 {TIME_QUANTUM})")
    parser.add_argument("-n", "--horizon", type=int, default=SIMULATION_HORIZON,
                        help=f"시뮬레이션 시간 범위 (기본값 {SIMULATION_HORIZON})")
    parser.add_argument("-v", "--verbose", action="store_true", help="이벤트 로그 출력")
    parser.add_argument("-d", "--details", action="store_true", help="프로세스 상세 정보 및 통계 출력")
    parser.add_argument("-g", "--gantt", metavar="PATH", help="Gantt 차트 PNG 저장 경로")
    parser.add_argument("--generate", type=int, metavar="COUNT",
                        help="랜덤 프로세스 COUNT개를 생성해 input_file에 저장한 뒤 실행")
    parser.add_argument("--seed", type=int, help="랜덤 프로세스 생성 시드")
    return parser


def generate_input_file(path: str, count: int, seed: int = None):
    """랜덤 워크로드를 생성해 입력 파일 형식으로 저장"""
    output_dir = os.path.dirname(path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    processes = InputParser.generate_random_processes(count, seed=seed)
    InputParser.save_processes_to_file(processes, path)
    print(f"랜덤 프로세스 {count}개를 생성했습니다: {path}")


def run_simulation(input_file: str, time_quantum: int = TIME_QUANTUM,
                   horizon: int = SIMULATION_HORIZON, verbose: bool = False,
                   summary: bool = False):
    """입력 파일을 읽어 시뮬레이션 실행"""
    processes = InputParser.parse_file(input_file)
    if summary:
        InputParser.print_process_summary(processes)
    scheduler = PriorityRoundRobinScheduler(processes, time_quantum=time_quantum, horizon=horizon)
    return scheduler.run(verbose=verbose)


def main(argv=None) -> int:
    """메인 함수"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.quantum < 1:
        parser.error("타임 퀀텀은 1 이상이어야 합니다")
    if args.horizon < 0:
        parser.error("시뮬레이션 시간 범위는 0 이상이어야 합니다")
    if args.generate is not None and args.generate < 1:
        parser.error("생성할 프로세스 수는 1 이상이어야 합니다")

    if args.generate is not None:
        generate_input_file(args.input_file, args.generate, args.seed)

    try:
        result = run_simulation(args.input_file, args.quantum, args.horizon, args.verbose,
                                summary=args.details or args.generate is not None)
    except FileNotFoundError:
        print(f"File not found: {args.input_file}")
        return 2
    except MalformedRecordError as e:
        print(f"[오류] 잘못된 입력 레코드 - {e}")
        return 1

    visualizer = Visualizer()
    visualizer.print_output(result)

    if args.details:
        visualizer.print_process_details(result)
        visualizer.print_statistics(result)

    if args.gantt:
        output_dir = os.path.dirname(args.gantt)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        visualizer.draw_gantt_chart(result['gantt_chart'], result['algorithm'],
                                    save_path=args.gantt, show=False)

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\n사용자에 의해 시뮬레이션이 중단되었습니다.")
        sys.exit(0)
