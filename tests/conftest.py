import matplotlib

matplotlib.use("Agg")

import pytest

from core.process import Process

SAMPLE_DATA = (
    "Process\tPriority\tBurst\tArrival\n"
    "-------\t--------\t-----\t-------\n"
    "P1\t8\t15\t0\n"
    "P2\t3\t20\t0\n"
    "P3\t4\t20\t20\n"
    "P4\t4\t20\t25\n"
    "P5\t5\t5\t45\n"
    "P6\t5\t15\t55\n"
)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "scheduling_data.txt"
    path.write_text(SAMPLE_DATA, encoding="utf-8")
    return path


@pytest.fixture
def sample_processes():
    return [
        Process("P1", 8, 15, 0),
        Process("P2", 3, 20, 0),
        Process("P3", 4, 20, 20),
        Process("P4", 4, 20, 25),
        Process("P5", 5, 5, 45),
        Process("P6", 5, 15, 55),
    ]
