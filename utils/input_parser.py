"""
입력 데이터 파서 및 프로세스 생성 모듈
"""

import random
import re
from typing import List
from core.process import Process

HEADER_FIELDS = ("Process", "Priority", "Burst", "Arrival")


class MalformedRecordError(ValueError):
    """필드가 빠졌거나 숫자가 아닌 레코드"""

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {line!r}")


class InputParser:
    """입력 파일 파서"""

    @staticmethod
    def parse_file(filename: str) -> List[Process]:
        """
        파일에서 프로세스 정보 읽기

        파일 형식 (탭 구분): Process  Priority  Burst  Arrival
        예: P1	3	15	0

        첫 줄이 헤더이면 헤더와 구분선(-------)을 건너뛴다.

        Args:
            filename: 입력 파일 경로

        Returns:
            프로세스 리스트 (파일 순서 유지)

        Raises:
            FileNotFoundError: 파일이 없을 때
            MalformedRecordError: 레코드 형식이 잘못되었을 때
        """
        with open(filename, 'r', encoding='utf-8') as f:
            return InputParser.parse_text(f.read())

    @staticmethod
    def parse_text(text: str) -> List[Process]:
        """문자열에서 프로세스 정보 읽기 (parse_file과 같은 형식)"""
        processes = []
        seen = set()
        header_allowed = True

        for line_number, raw in enumerate(text.splitlines(), 1):
            line = raw.strip()

            # 주석 및 빈 줄 제거
            if not line or line.startswith('#'):
                continue

            parts = InputParser._parse_line(line)

            if header_allowed and InputParser._is_header(parts):
                continue
            if InputParser._is_separator(line):
                continue
            header_allowed = False

            process = InputParser._create_process_from_parts(parts, line_number, line)
            if process.pid in seen:
                raise MalformedRecordError(line_number, line, f"duplicate process id {process.pid}")
            seen.add(process.pid)
            processes.append(process)

        return processes

    @staticmethod
    def _parse_line(line: str) -> List[str]:
        """탭(또는 공백)으로 구분된 라인 파싱"""
        if '\t' in line:
            return [part.strip() for part in re.split(r'\t+', line) if part.strip()]
        return line.split()

    @staticmethod
    def _is_header(parts: List[str]) -> bool:
        return [part.lower() for part in parts] == [field.lower() for field in HEADER_FIELDS]

    @staticmethod
    def _is_separator(line: str) -> bool:
        return set(line) <= set("-\t ")

    @staticmethod
    def _create_process_from_parts(parts: List[str], line_number: int, line: str) -> Process:
        """파싱된 부분에서 프로세스 객체 생성"""
        if len(parts) != 4:
            raise MalformedRecordError(line_number, line,
                                       f"expected 4 fields, got {len(parts)}")

        pid = parts[0]
        try:
            priority = int(parts[1])
            burst = int(parts[2])
            arrival_time = int(parts[3])
        except ValueError:
            raise MalformedRecordError(line_number, line, "non-numeric field")

        # 검증
        if burst <= 0:
            raise MalformedRecordError(line_number, line, f"burst must be positive: {burst}")
        if arrival_time < 0:
            raise MalformedRecordError(line_number, line, f"arrival must be >= 0: {arrival_time}")

        return Process(pid, priority, burst, arrival_time)

    @staticmethod
    def generate_random_processes(num_processes: int = 10,
                                  max_arrival: int = 40,
                                  max_burst: int = 25,
                                  max_priority: int = 5,
                                  seed: int = None) -> List[Process]:
        """
        랜덤 프로세스 생성

        Args:
            num_processes: 생성할 프로세스 수
            max_arrival: 최대 도착 시간
            max_burst: 최대 CPU 버스트 시간
            max_priority: 최대 우선순위
            seed: 랜덤 시드

        Returns:
            프로세스 리스트
        """
        rng = random.Random(seed)

        processes = []
        for i in range(1, num_processes + 1):
            processes.append(Process(
                f"P{i}",
                rng.randint(1, max_priority),
                rng.randint(1, max_burst),
                rng.randint(0, max_arrival)
            ))

        return processes

    @staticmethod
    def save_processes_to_file(processes: List[Process], filename: str):
        """
        프로세스 리스트를 파일로 저장 (parse_file로 다시 읽을 수 있는 형식)

        Args:
            processes: 저장할 프로세스 리스트
            filename: 출력 파일 경로
        """
        with open(filename, 'w', encoding='utf-8') as f:
            f.write('\t'.join(HEADER_FIELDS) + "\n")
            f.write('\t'.join('-' * len(field) for field in HEADER_FIELDS) + "\n")

            for process in processes:
                f.write(f"{process.pid}\t{process.priority}\t{process.burst}\t{process.arrival_time}\n")

    @staticmethod
    def print_process_summary(processes: List[Process]):
        """프로세스 요약 정보 출력"""
        print("\n" + "="*60)
        print("프로세스 요약")
        print("="*60)
        print(f"{'PID':<10} {'우선순위':>10} {'버스트':>10} {'도착시간':>10}")
        print("-"*60)

        for p in processes:
            print(f"{p.pid:<10} {p.priority:>10} {p.burst:>10} {p.arrival_time:>10}")

        print("="*60)
        print(f"전체 프로세스: {len(processes)}개")
        print(f"  - 총 CPU 버스트: {sum(p.burst for p in processes)}")
        print()
