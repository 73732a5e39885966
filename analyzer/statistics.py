import json
import re
from datetime import datetime

import matplotlib
matplotlib.use("Agg")  # File output only; no display needed
import matplotlib.pyplot as plt


class Statistics:
    """
    Receives all communications and
    analyzes and records necessary information as an independent "recorder".
    Collects all events in JSON Lines format for offline playback.
    """
    LIFT_TOPIC = re.compile(r'lift/(\d+)/(status|door|position|busy)')
    FLOOR_TOPIC = re.compile(r'floor/(\d+)/request')

    def __init__(self, env, broadcast_pipe):
        self.env = env
        self.broadcast_pipe = broadcast_pipe
        self.lift_trajectories = {}  # {lift_id: [(time, floor), ...]}
        self.door_events_history = {}  # {lift_id: [(time, door_state), ...]}
        self.request_on_times = {}  # {(floor, direction): time the button lit}
        self.request_history = []  # Served requests: {floor, direction, on, off, wait}
        self.assignments = []
        self.queued_count = 0

        # JSON Lines event log for offline playback
        self.event_log = []
        self.simulation_metadata = {}

    def _add_event_log(self, event_type, event_data):
        """
        Add an event to the JSON Lines log.

        Args:
            event_type (str): Type of event (e.g., 'lift_status', 'floor_request', etc.)
            event_data (dict): Event-specific data
        """
        event = {
            "time": self.env.now,
            "type": event_type,
            "data": event_data
        }
        self.event_log.append(event)

    def set_simulation_metadata(self, metadata):
        """
        Set simulation metadata (called before simulation starts).

        Args:
            metadata (dict): Simulation configuration (num_floors, num_lifts, etc.)
        """
        self.simulation_metadata = {
            "format_version": "1.0",
            "timestamp": datetime.now().isoformat(),
            "config": metadata
        }

    def start_listening(self):
        """
        Main process to start intercepting global broadcasts.
        """
        while True:
            data = yield self.broadcast_pipe.get()
            self.record(data.get('topic', ''), data.get('message', {}))

    def record(self, topic, message):
        """Record one broker message"""
        lift_match = self.LIFT_TOPIC.fullmatch(topic)
        if lift_match:
            lift_id = int(lift_match.group(1))
            kind = lift_match.group(2)
            timestamp = message.get('timestamp', self.env.now)

            if kind == 'status':
                trajectory = self.lift_trajectories.setdefault(lift_id, [])
                point = (timestamp, message.get('floor'))
                # Record if not exactly the same as the last data point
                if not trajectory or trajectory[-1] != point:
                    trajectory.append(point)
                self._add_event_log('lift_status', {
                    'lift': lift_id,
                    'floor': message.get('floor'),
                    'status': message.get('status'),
                    'target_floor': message.get('target_floor')
                })
            elif kind == 'door':
                self.door_events_history.setdefault(lift_id, []).append((timestamp, message.get('state')))
                self._add_event_log('door_event', {'lift': lift_id, 'state': message.get('state')})
            elif kind == 'position':
                self._add_event_log('lift_position', {
                    'lift': lift_id,
                    'floor': message.get('floor'),
                    'travel_duration_ms': message.get('travel_duration_ms')
                })
            elif kind == 'busy':
                self._add_event_log('lift_busy', {'lift': lift_id, 'is_busy': message.get('is_busy')})
            return

        floor_match = self.FLOOR_TOPIC.fullmatch(topic)
        if floor_match:
            floor = message.get('floor')
            direction = message.get('direction')
            timestamp = message.get('timestamp', self.env.now)
            key = (floor, direction)
            if message.get('active'):
                self.request_on_times[key] = timestamp
            else:
                on_time = self.request_on_times.pop(key, None)
                if on_time is not None:
                    self.request_history.append({
                        'floor': floor,
                        'direction': direction,
                        'on': on_time,
                        'off': timestamp,
                        'wait': timestamp - on_time
                    })
            self._add_event_log('floor_request', {
                'floor': floor,
                'direction': direction,
                'active': message.get('active')
            })
            return

        if topic == 'dispatcher/assignment':
            self.assignments.append(dict(message))
            self._add_event_log('assignment', {
                'floor': message.get('floor'),
                'direction': message.get('direction'),
                'lift': message.get('lift_id'),
                'from_queue': message.get('from_queue')
            })
        elif topic == 'dispatcher/queued':
            self.queued_count += 1
            self._add_event_log('queued', {
                'floor': message.get('floor'),
                'direction': message.get('direction'),
                'queue_length': message.get('queue_length')
            })

    def wait_times(self):
        """Seconds from button ON to button OFF for every served request"""
        return [entry['wait'] for entry in self.request_history]

    def trips_per_lift(self):
        """Number of completed door cycles per lift"""
        trips = {}
        for lift_id, events in self.door_events_history.items():
            trips[lift_id] = sum(1 for _, state in events if state == 'CLOSED')
        return trips

    def print_summary(self):
        print("\n" + "=" * 60)
        print("   LIFT DISPATCH SUMMARY")
        print("=" * 60)

        waits = self.wait_times()
        print(f"Requests served: {len(waits):>6}")
        print(f"Requests queued: {self.queued_count:>6} (arrived while every lift was busy)")
        print(f"Still active:    {len(self.request_on_times):>6}")
        if waits:
            print(f"\nWaiting Time (Button ON to OFF):")
            print(f"  Average: {sum(waits) / len(waits):>6.2f} seconds")
            print(f"  Min:     {min(waits):>6.2f} seconds")
            print(f"  Max:     {max(waits):>6.2f} seconds")

        trips = self.trips_per_lift()
        if trips:
            print("\nTrips per lift:")
            for lift_id in sorted(trips):
                print(f"  Lift_{lift_id}: {trips[lift_id]}")
        print("=" * 60)

    def plot_trajectory_diagram(self, output_filename='lift_trajectory_diagram.png'):
        """Draw the floor-versus-time diagram of every lift and save it"""
        print("\n--- Plotting: Lift Trajectory Diagram ---")
        fig = plt.figure(figsize=(14, 8))

        lift_colors = ['#1f77b4', '#ff7f0e', '#2ca02c', '#d62728', '#9467bd']

        for idx, lift_id in enumerate(sorted(self.lift_trajectories)):
            trajectory = sorted(self.lift_trajectories[lift_id], key=lambda x: x[0])
            if not trajectory:
                continue
            # Extend to the end of the run so idle time is visible
            if trajectory[-1][0] < self.env.now:
                trajectory.append((self.env.now, trajectory[-1][1]))
            times, floors = zip(*trajectory)
            color = lift_colors[idx % len(lift_colors)]
            plt.plot(times, floors, label=f"Lift_{lift_id}", linewidth=2.5, color=color, alpha=0.8)

            open_times = [t for t, state in self.door_events_history.get(lift_id, []) if state == 'OPEN']
            if open_times:
                plt.scatter(open_times, [self._floor_at(lift_id, t) for t in open_times],
                            marker='s', color=color, s=40, zorder=3)

        for entry in self.request_history:
            marker = '^' if entry['direction'] == 'up' else 'v'
            plt.scatter([entry['on']], [entry['floor']], marker=marker, color='gray', s=60, zorder=2)

        plt.title("Lift Trajectory Diagram")
        plt.xlabel("Time (s)")
        plt.ylabel("Floor")
        plt.grid(True, which='both', linestyle='--', alpha=0.7)

        all_floors = [floor for trajectory in self.lift_trajectories.values() for _, floor in trajectory]
        if all_floors:
            plt.yticks(range(1, int(max(all_floors)) + 2))

        if self.lift_trajectories:
            plt.legend(loc='upper right', fontsize=10)

        plt.savefig(output_filename, dpi=150, bbox_inches='tight')
        plt.close(fig)
        print(f"Trajectory diagram saved to: {output_filename}")
        return output_filename

    def _floor_at(self, lift_id, timestamp):
        floor = 1
        for t, f in self.lift_trajectories.get(lift_id, []):
            if t > timestamp:
                break
            floor = f
        return floor

    def save_event_log(self, filename='simulation_log.jsonl'):
        """
        Save the event log to a JSON Lines file.

        Args:
            filename (str): Name of the output file (default: 'simulation_log.jsonl')
        """
        print(f"\nSaving event log to {filename}...")

        with open(filename, 'w', encoding='utf-8') as f:
            # Write metadata as first line
            if self.simulation_metadata:
                f.write(json.dumps({
                    "type": "metadata",
                    "data": self.simulation_metadata
                }) + '\n')

            for event in self.event_log:
                f.write(json.dumps(event, ensure_ascii=False) + '\n')

        print(f"Event log saved: {len(self.event_log)} events written to {filename}")
        return filename
