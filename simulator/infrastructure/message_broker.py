import simpy
from typing import Any, Callable, Dict, List, Optional

Subscriber = Callable[[str, Any], None]


class MessageBroker:
    """
    Mediates communication between components within the simulation.
    Implements a topic-based publish-subscribe model.

    Two ways to consume messages:
    - subscribe(): callbacks invoked synchronously on publish, in the
      same simulation step as the publisher (the dispatcher reacts to
      idle reports this way)
    - get_broadcast_pipe(): a Store mirroring every topic, read by a
      SimPy process (Statistics)
    """
    def __init__(self, env: simpy.Environment, verbose: bool = True):
        """
        Initialize the message broker

        Args:
            env (simpy.Environment): SimPy environment
            verbose (bool): Print every publish
        """
        self.env = env
        self.verbose = verbose
        self.subscribers: Dict[str, List[Subscriber]] = {}
        self.wildcard_subscribers: List[Subscriber] = []
        self.broadcast_pipe: Optional[simpy.Store] = None

    def put(self, topic: str, message):
        """
        Publish (put) a message to the specified topic
        """
        if self.verbose:
            print(f"{self.env.now:.2f} [Broker] Publish on '{topic}': {message}")

        for callback in self.subscribers.get(topic, []) + self.wildcard_subscribers:
            callback(topic, message)

        if self.broadcast_pipe is not None:
            self.broadcast_pipe.put({'topic': topic, 'message': message})

    def subscribe(self, topic: str, callback: Subscriber):
        """
        Register a callback(topic, message) for a topic, or for every topic with '*'
        """
        if topic == '*':
            self.wildcard_subscribers.append(callback)
        else:
            self.subscribers.setdefault(topic, []).append(callback)

    def get_broadcast_pipe(self) -> simpy.Store:
        """
        Returns the global broadcast pipe, which receives every message
        published after the first call (used by Statistics)
        """
        if self.broadcast_pipe is None:
            self.broadcast_pipe = simpy.Store(self.env)
        return self.broadcast_pipe

    def get_current_time(self) -> float:
        """
        Get current simulation time

        Lets controllers read the clock without holding the SimPy environment.
        """
        return self.env.now
