"""Change notification for editable geometry.

Contours and seam allowances announce every effective edit to their
subscribers, which typically redraw or recompute offsets.
"""

from collections.abc import Callable
from typing import Any

Listener = Callable[[Any], None]


class ChangeNotifier:
    """Registry of change listeners for one object.

    Listeners are called synchronously, in subscription order, with the
    changed object as their only argument.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        """Register a listener; registering the same listener twice is a no-op."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a listener if it is registered."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self, source: Any) -> None:
        """Call every listener with the changed object."""
        for listener in list(self._listeners):
            listener(source)

    def __len__(self) -> int:
        return len(self._listeners)
