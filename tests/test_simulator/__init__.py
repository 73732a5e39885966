"""
Simulator Tests

Tests for the lift state machine, the floor request registry,
the pending request queue and the LiftSimulation run surface.
"""
