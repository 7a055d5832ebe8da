"""Shared values — mutable cells that animations write and the UI observes.

SharedValue publishes "value" then "change" whenever a write changes its
textual representation. SharedValues owns one SharedValue per key of a
state mapping and re-publishes child writes as group events.

Change detection compares str(new) with str(current). This is loose on
purpose and is meant for numbers, strings and booleans. Two different
objects that render to the same str() count as equal and do not notify.
"""

from __future__ import annotations

from typing import Any, Generic, Iterator, Mapping, TypeVar

from motionfx.emitter import EventEmitter, EventHandle

T = TypeVar("T")


class SharedValue(EventEmitter, Generic[T]):
    """A single observable cell with an initial value to reset to."""

    def __init__(self, value: T) -> None:
        super().__init__()
        self._initial_value = value
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        if str(value) == str(self._value):
            return
        self._value = value
        self.emit("value", value)
        self.emit("change", value)

    @property
    def initial_value(self) -> T:
        return self._initial_value

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self.value = value

    def clear(self) -> None:
        """Reset to the initial value. Notifies only if that is a change."""
        self.value = self._initial_value

    def __repr__(self) -> str:
        return f"SharedValue({self._value!r})"


class StateView:
    """Read-only view of a group's SharedValues: state.x or state["x"]."""

    __slots__ = ("_values",)

    def __init__(self, values: dict[str, SharedValue]) -> None:
        object.__setattr__(self, "_values", values)

    def __getattr__(self, key: str) -> SharedValue:
        try:
            return self._values[key]
        except KeyError:
            raise AttributeError(key) from None

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"cannot replace shared value {key!r}; assign to .value instead")

    def __getitem__(self, key: str) -> SharedValue:
        return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def keys(self):
        return self._values.keys()

    def items(self):
        return self._values.items()

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v.value!r}" for k, v in self._values.items())
        return f"StateView({inner})"


class SharedValues(EventEmitter):
    """Key-based SharedValue container with aggregated notifications.

    Events:
        "value"(key, value)  a child's value changed
        "change"(snapshot)   fired right after "value", with every current value
        "destroy"()          fired by destroy() before forwarding is torn down
    """

    def __init__(self, state: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self.current = StateView({key: SharedValue(value) for key, value in (state or {}).items()})
        self._forwarding: list[EventHandle] = []
        self._active = False
        self.initialize()

    @property
    def values(self) -> dict[str, Any]:
        """A fresh snapshot of every child's current value."""
        return {key: shared.value for key, shared in self.current.items()}

    def initialize(self) -> None:
        """(Re)subscribe to every child. Safe to call repeatedly."""
        self._stop_forwarding()
        for key, shared in self.current.items():
            self._forwarding.append(shared.on("value", self._forwarder(key)))
        self._active = True

    def _forwarder(self, key: str):
        def _forward(value):
            self.emit("value", key, value)
            self.emit("change", self.values)

        return _forward

    def _stop_forwarding(self) -> None:
        for handle in self._forwarding:
            handle.stop()
        self._forwarding.clear()

    def destroy(self) -> None:
        """Announce "destroy", then detach from the children. Idempotent."""
        if not self._active:
            return
        self.emit("destroy")
        self._stop_forwarding()
        self._active = False

    def get(self, key: str) -> Any:
        return self.current[key].value if key in self.current else None

    def set(self, key: str, value: Any) -> None:
        if key in self.current:
            self.current[key].value = value

    def update(self, values: Mapping[str, Any]) -> None:
        for key, value in values.items():
            self.set(key, value)

    def clear(self) -> None:
        """Reset every child to its initial value."""
        for _, shared in self.current.items():
            shared.clear()

    def __repr__(self) -> str:
        return f"SharedValues({self.values!r})"
