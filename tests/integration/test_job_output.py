"""End-to-end test that generates a G-code program and checks its motions."""

import json
import re
from pathlib import Path

import pytest

from routerpath.config import RouterpathSettings
from routerpath.core.processor import JobProcessor

MOVE = re.compile(r"^G[0-3] ")
WORD = re.compile(r"([XYZIJRF])(-?\d+\.\d{5})")

JOB = {
    "name": "bracket",
    "settings": {
        "cut": {"bit_diameter": 0.125, "pass_depth": 0.1, "stepover": 0.5, "feedrate": 40},
        "tabs": {"width": 0.3, "height": 0.05},
        "gcode": {"units": "inch", "safe_z": 0.25},
    },
    "operations": [
        {
            "kind": "pocket_polygon",
            "name": "slot",
            "points": [[0, 0], [3, 0.2], [2.8, 1.6], [1.6, 0.8], [0.9, 2.2], [-0.3, 1.5]],
            "depth": 0.2,
        },
        {"kind": "cut_path", "name": "score", "points": [[0, -1], [3, -1], [3, -2]], "depth": 0.05},
        {
            "kind": "cut_polygon",
            "name": "outline",
            "points": [[-1, -3], [4, -3], [4, 3], [-1, 3]],
            "depth": 0.25,
        },
    ],
}


@pytest.fixture
def program(tmp_path: Path) -> list[str]:
    job_path = tmp_path / "bracket.json"
    job_path.write_text(json.dumps(JOB), encoding="utf-8")
    output_path = tmp_path / "bracket.nc"

    stats = JobProcessor(RouterpathSettings(), quiet=True).process(job_path, output_path)

    assert stats.processed_count == 3
    assert stats.error_count == 0
    return output_path.read_text(encoding="utf-8").splitlines()


def words(line: str) -> dict[str, float]:
    return {letter: float(value) for letter, value in WORD.findall(line)}


class TestJobOutput:
    """Checks on the generated program."""

    def test_program_frame(self, program: list[str]) -> None:
        assert program[0] == "G20"
        assert program[1] == "M4"
        assert program[-2:] == ["M5", "M2"]
        assert [line for line in program if line.startswith("(")] == [
            "(slot)", "(score)", "(outline)",
        ]

    def test_numbers_have_five_decimals(self, program: list[str]) -> None:
        for line in program:
            if MOVE.match(line):
                for token in line.split()[1:]:
                    assert re.fullmatch(r"[XYZIJRF]-?\d+\.\d{5}", token), line

    def test_never_below_depth(self, program: list[str]) -> None:
        depths = [words(line)["Z"] for line in program if "Z" in words(line)]
        assert min(depths) == pytest.approx(-0.25)

    def test_rapids_at_safe_height(self, program: list[str]) -> None:
        rapids = [words(line) for line in program if line.startswith("G0 ")]
        assert rapids
        assert all(r["Z"] == pytest.approx(0.25) for r in rapids)

    def test_outline_has_tabs(self, program: list[str]) -> None:
        start = program.index("(outline)")
        outline_depths = [words(line)["Z"] for line in program[start:] if line.startswith("G1 ")]
        # Tab Z = 0.05 - 0.25
        assert any(z == pytest.approx(-0.2) for z in outline_depths)

    def test_cutting_moves_have_feedrate(self, program: list[str]) -> None:
        for line in program:
            if line.startswith("G1 "):
                assert words(line)["F"] == pytest.approx(40.0)
