import simpy
from abc import ABC, abstractmethod
from typing import Any


class Entity(ABC):
    """
    Abstract base class for entities in SimPy simulation.

    An entity owns one SimPy process (its run() generator) and a single
    current state. Concrete classes define the state values and react to
    transitions through _on_state_changed().
    """

    def __init__(self, env: simpy.Environment, name: str, initial_state: Any = None):
        """
        Initialize the entity.

        Args:
            env: The SimPy simulation environment this entity belongs to.
            name: Entity name, used as the log tag.
            initial_state: State the entity starts in (no transition is logged for it).
        """
        self.env = env
        self.name: str = name
        self.state = initial_state

        # The process only starts running once the environment steps,
        # so subclasses may finish their own __init__ after this call.
        self._process = self.env.process(self.run())

        print(f'{self.env.now:.2f} [{self.name}] {self.__class__.__name__} created.')

    @abstractmethod
    def run(self):
        """
        Generator serving as the entity's SimPy process body.

        Use yield to wait for events and to advance simulation time.
        """
        pass

    def set_state(self, new_state):
        """
        Transition the entity's state.

        Args:
            new_state: Target state
        """
        if self.state != new_state:
            old_state = self.state
            self.state = new_state
            self._on_state_changed(old_state, new_state)

    def _on_state_changed(self, old_state, new_state):
        """Hook called after every transition. Subclasses extend it."""
        self._log_state_change(old_state, new_state)

    def _log_state_change(self, old_state, new_state):
        old = getattr(old_state, 'name', old_state)
        new = getattr(new_state, 'name', new_state)
        print(f'{self.env.now:.2f} [{self.name}] State: {old} -> {new}')

    @property
    def process(self) -> simpy.Process:
        """SimPy process object running run()"""
        return self._process
