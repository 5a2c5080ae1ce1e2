"""
시각화 모듈: 결과 출력 및 Gantt Chart 생성
"""

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from typing import List, Dict
from core.scheduler_base import GanttEntry
from core.process import ProcessState


class Visualizer:
    """스케줄링 결과 시각화"""

    def __init__(self):
        # 프로세스별 색상 설정
        self.colors = plt.cm.Set3.colors

    def draw_gantt_chart(self, gantt_data: List[GanttEntry], algorithm_name: str,
                         save_path: str = None, show: bool = True):
        """
        Gantt Chart 그리기

        Args:
            gantt_data: Gantt Chart 데이터
            algorithm_name: 알고리즘 이름
            save_path: 저장 경로 (None이면 저장 안 함)
            show: 화면에 표시할지 여부
        """
        if not gantt_data:
            print(f"{algorithm_name}에 대한 Gantt 차트 데이터가 없습니다")
            return

        fig, ax = plt.subplots(figsize=(16, 6))

        # 처음 실행된 순서대로 행 배치
        pids = []
        for entry in gantt_data:
            if entry.pid not in pids:
                pids.append(entry.pid)
        pid_to_y = {pid: idx for idx, pid in enumerate(pids)}

        for entry in gantt_data:
            duration = entry.end_time - entry.start_time
            y_pos = pid_to_y[entry.pid]
            color = self.colors[y_pos % len(self.colors)]
            alpha = 1.0 if entry.state == ProcessState.RUNNING else 0.5

            ax.barh(y_pos, duration, left=entry.start_time, height=0.8,
                    color=color, alpha=alpha, edgecolor='black', linewidth=0.5)

            # 프로세스 ID 표시
            if duration > 1:  # 충분히 긴 경우만 텍스트 표시
                ax.text(entry.start_time + duration/2, y_pos, entry.pid,
                        ha='center', va='center', fontsize=8, fontweight='bold')

        # 축 설정
        ax.set_yticks(range(len(pids)))
        ax.set_yticklabels(pids)
        ax.invert_yaxis()
        ax.set_xlabel('Time', fontsize=12)
        ax.set_ylabel('Process', fontsize=12)
        ax.set_title(f'Gantt Chart - {algorithm_name}', fontsize=14, fontweight='bold')
        ax.grid(axis='x', alpha=0.3)

        legend_elements = [mpatches.Patch(color=self.colors[0], label='Running')]
        ax.legend(handles=legend_elements, loc='upper right')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Gantt 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)

    @staticmethod
    def format_output(results: Dict) -> str:
        """프로세스별 최종 반환 시간과 대기 시간 (입력 순서)"""
        lines = ["output:"]
        for process in results['processes']:
            lines.append(f"\t{process.pid},  turnaround time: {process.turnaround:2d},  "
                         f"wait time: {process.wait:2d}")
        return "\n".join(lines)

    def print_output(self, results: Dict):
        print(self.format_output(results))

    def print_statistics(self, results: Dict):
        """
        통계 출력

        Args:
            results: 알고리즘 실행 결과
        """
        stats = results['statistics']
        print("\n" + "="*80)
        print(f"스케줄링 통계 - {results['algorithm']}")
        print("="*80)
        print(f"{'평균 대기':>12} {'평균 반환':>12} {'CPU 이용률(%)':>15} {'문맥전환':>12} {'완료':>8}")
        print("-"*80)
        print(f"{stats['avg_waiting_time']:>12.2f} "
              f"{stats['avg_turnaround_time']:>12.2f} "
              f"{stats['cpu_utilization']:>15.2f} "
              f"{stats['context_switches']:>12} "
              f"{stats['completed']:>8}")
        print("="*80 + "\n")

    def print_process_details(self, results: Dict):
        """
        개별 프로세스의 상세 정보 출력

        Args:
            results: 알고리즘 실행 결과
        """
        print(f"\n{'='*90}")
        print(f"프로세스 상세 - {results['algorithm']}")
        print(f"{'='*90}")
        print(f"{'PID':<8} {'우선순위':>8} {'버스트':>8} {'도착':>8} {'시작':>8} {'종료':>8} "
              f"{'대기':>8} {'반환':>8} {'상태':>12}")
        print(f"{'-'*90}")

        for process in results['processes']:
            start = process.start_time if process.start_time is not None else '-'
            finish = process.finish_time if process.finish_time is not None else '-'
            print(f"{process.pid:<8} "
                  f"{process.priority:>8} "
                  f"{process.burst:>8} "
                  f"{process.arrival_time:>8} "
                  f"{start:>8} "
                  f"{finish:>8} "
                  f"{process.wait:>8} "
                  f"{process.turnaround:>8} "
                  f"{process.state.value:>12}")

        print(f"{'='*90}\n")
