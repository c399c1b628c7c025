"""Host-owned container for the live partition.

A store holds exactly one partition and applies actions to it through the
reducer. Stores are created explicitly and passed to whatever needs them;
several independent stores can coexist.
"""

from collections.abc import Callable

import structlog

from curbmap.config import PartitionConfig
from curbmap.core.reducer import ActionResult, apply_action, check_invariants
from curbmap.domain import Action, Partition, ReplaceSegments

Subscriber = Callable[[Partition, Action], None]


class PartitionStore:
    """Owns one live partition and dispatches actions to the reducer.

    Example:
        store = PartitionStore(initialize(240, "bf-1"))
        store.dispatch(AddSegment(-1))
        store.partition.segments
    """

    def __init__(
        self,
        partition: Partition,
        config: PartitionConfig | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            partition: Initial partition
            config: Partition settings passed to every reducer call
            logger: Structured logger (module logger if None)
        """
        self._partition = partition
        self._config = config
        self._logger = logger if logger is not None else structlog.get_logger("curbmap.store")
        self._subscribers: list[Subscriber] = []

    @property
    def partition(self) -> Partition:
        """The current partition."""
        return self._partition

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback run after every applied action.

        Returns:
            Function that removes the callback again
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def dispatch(self, action: Action) -> ActionResult:
        """Apply an action to the current partition.

        Args:
            action: Edit to apply

        Returns:
            ActionResult describing the outcome
        """
        result = apply_action(self._partition, action, self._config)

        if not result.applied:
            self._logger.debug(
                "Action rejected",
                action=type(action).__name__,
                blockface=self._partition.blockface_id,
                reason=result.reason,
            )
            return result

        if isinstance(action, ReplaceSegments):
            violations = check_invariants(result.partition)
            if violations:
                self._logger.warning(
                    "Segment replacement broke partition invariants",
                    blockface=result.partition.blockface_id,
                    violations=violations,
                )

        self._partition = result.partition
        for callback in list(self._subscribers):
            callback(self._partition, action)

        return result
