"""
Command Line Runner Tests
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import main

SCENARIO = project_root / "scenarios" / "simulation" / "morning_calls.yaml"


def test_scenario_runs_to_completion(tmp_path):
    log_path = tmp_path / "log.jsonl"
    plot_path = tmp_path / "plot.png"

    assert main.main([str(SCENARIO), str(log_path), str(plot_path)]) == 0

    assert log_path.exists()
    assert plot_path.exists()


def test_every_scripted_request_is_served(tmp_path):
    statistics = main.run_simulation(SCENARIO, str(tmp_path / "log.jsonl"))
    # Eight presses, one duplicate (7F down at t=4.5)
    assert len(statistics.wait_times()) == 7
    assert statistics.request_on_times == {}


def test_missing_scenario_exits_with_error(tmp_path, capsys):
    assert main.main([str(tmp_path / "missing.yaml")]) == 1
    assert "Scenario file not found" in capsys.readouterr().err
