import sys

# Configuration
from config import load_simulation_config
from simulator.exceptions import InvalidConfigurationError

# Simulator
from simulator.simulation import LiftSimulation

# Analyzer
from analyzer.statistics import Statistics

DEFAULT_SCENARIO = "scenarios/simulation/morning_calls.yaml"
DEFAULT_EVENT_LOG = "simulation_log.jsonl"


def run_simulation(sim_config_path=DEFAULT_SCENARIO, event_log_path=DEFAULT_EVENT_LOG, plot_path=None):
    """
    Set up and run a scenario

    Args:
        sim_config_path: Path to simulation configuration YAML file
        event_log_path: Where to write the JSON Lines event log
        plot_path: Where to save the trajectory diagram (None = no plot)

    Returns:
        Statistics collected during the run
    """
    print("--- Loading Configuration ---")
    sim_config = load_simulation_config(sim_config_path)
    print(f"Simulation Config: {sim_config_path}")
    print(f"Building: {sim_config.building.num_floors} floors, {sim_config.lift.num_lifts} lifts")
    print(f"Scripted requests: {len(sim_config.requests)}")

    print("\n--- Simulation Setup ---")
    simulation = LiftSimulation(sim_config)

    # Create statistics collector
    statistics = Statistics(simulation.env, simulation.broker.get_broadcast_pipe())
    simulation.env.process(statistics.start_listening())
    metadata = simulation.metadata()
    metadata['config_file'] = str(sim_config_path)
    statistics.set_simulation_metadata(metadata)

    print("\n--- Simulation Start ---")
    simulation.run()
    print(f"\n--- Simulation End at {simulation.env.now:.2f} ---")

    pending = len(simulation.dispatcher.pending_queue)
    if pending:
        print(f"Warning: {pending} request(s) still pending when the run stopped")

    statistics.print_summary()
    statistics.save_event_log(event_log_path)
    if plot_path:
        statistics.plot_trajectory_diagram(plot_path)

    return statistics


def main(argv=None):
    """Command line entry: main.py [scenario.yaml] [event_log.jsonl] [trajectory.png]"""
    args = sys.argv[1:] if argv is None else argv
    sim_config_path = args[0] if len(args) > 0 else DEFAULT_SCENARIO
    event_log_path = args[1] if len(args) > 1 else DEFAULT_EVENT_LOG
    plot_path = args[2] if len(args) > 2 else None

    try:
        run_simulation(sim_config_path, event_log_path, plot_path)
    except (FileNotFoundError, InvalidConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
