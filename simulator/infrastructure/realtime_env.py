"""
realtime_env.py

A SimPy environment that keeps simulated lift time in step with the wall
clock, so a run can be watched while it happens.
"""

import simpy
import time


class RealtimeEnvironment(simpy.Environment):
    """
    SimPy environment with real-time synchronization.

    After every simulation step it sleeps until the wall clock has caught
    up with simulated time divided by realtime_factor.

    Args:
        realtime_factor (float): Speed multiplier
            - 1.0 = real-time (1 sim second = 1 real second)
            - 0.5 = half speed
            - 2.0 = double speed
            - 0.0 = no delay (plain SimPy behavior)

    Example:
        >>> env = RealtimeEnvironment(realtime_factor=4.0)  # 2s-per-floor trips take 0.5s
    """

    def __init__(self, realtime_factor=1.0, initial_time=0):
        super().__init__(initial_time=initial_time)
        if realtime_factor < 0:
            raise ValueError("realtime_factor cannot be negative")
        self.realtime_factor = realtime_factor
        self.real_start_time = time.monotonic()
        self.sim_start_time = self.now

    def step(self):
        """
        Execute one simulation step, then sleep if ahead of the wall clock.
        """
        result = super().step()

        if self.realtime_factor > 0:
            sim_elapsed = self.now - self.sim_start_time
            target_real_time = self.real_start_time + (sim_elapsed / self.realtime_factor)
            sleep_time = target_real_time - time.monotonic()
            if sleep_time > 0:
                time.sleep(sleep_time)

        return result

    def set_speed(self, realtime_factor):
        """
        Change the speed during a run. Timing references restart from now.
        """
        if realtime_factor < 0:
            raise ValueError("realtime_factor cannot be negative")
        self.realtime_factor = realtime_factor
        self.real_start_time = time.monotonic()
        self.sim_start_time = self.now

    def get_speed(self):
        return self.realtime_factor
