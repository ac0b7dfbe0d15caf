"""
Callback Registry

Ordered handler lists keyed by a closed set of event kinds.
"""

from typing import Any, Callable, Dict, Iterable, List, Sequence

from ...exceptions.system import UnknownEventKindError


class CallbackRegistry:
    """
    Named event kinds mapped to handlers in registration order.

    The same handler may be registered several times and is then invoked that
    many times. Handlers cannot be removed.
    """

    def __init__(self, kinds: Iterable[str]):
        self._callbacks: Dict[str, List[Callable[..., Any]]] = {kind: [] for kind in kinds}

    @property
    def kinds(self) -> tuple:
        return tuple(self._callbacks)

    def _check_kind(self, kind: str) -> List[Callable[..., Any]]:
        try:
            return self._callbacks[kind]
        except KeyError:
            raise UnknownEventKindError(kind, self._callbacks) from None

    def register(self, kind: str, handler: Callable[..., Any]) -> None:
        callbacks = self._check_kind(kind)
        if not callable(handler):
            raise TypeError(f"Callback for '{kind}' must be callable, got {type(handler).__name__}")
        callbacks.append(handler)

    def get_callbacks(self, kind: str) -> List[Callable[..., Any]]:
        return list(self._check_kind(kind))

    def apply(self, kind: str, args: Sequence[Any] = ()) -> None:
        """
        Invoke every handler for kind with *args.

        Fail-fast: the first handler that raises stops the loop and the
        exception reaches the caller unchanged.
        """
        # Snapshot so a handler registering more handlers does not extend this pass
        for handler in list(self._check_kind(kind)):
            handler(*args)

    def __len__(self) -> int:
        return sum(len(callbacks) for callbacks in self._callbacks.values())
