"""Signal filtering and tuple helpers used by the GUI."""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

SignalT = TypeVar("SignalT")


class SecondOrderFilter(Generic[SignalT]):
    """Discrete second-order low-pass filter (bilinear transform)."""

    def __init__(
        self,
        omega: float = 1.0,
        eps: float = 0.8,
        ts: float = 0.01,
        initial_state: SignalT | None = None,
    ) -> None:
        self._omega = omega
        self._eps = eps
        self._ts = ts
        self._reset_called = False
        self._compute_coeff()
        self._y: Any = None
        if initial_state is not None:
            self.reset(initial_state)

    def _compute_coeff(self) -> None:
        wt = self._omega * self._ts
        self._b1 = 2.0
        self._b2 = 1.0
        self._a0 = 1.0 + 4.0 * self._eps / wt + 4.0 / wt**2
        self._a1 = 2.0 - 8.0 / wt**2
        self._a2 = 1.0 + 4.0 / wt**2 - 4.0 * self._eps / wt

    def reset(self, initial_state: SignalT) -> None:
        """Set all stored input and output samples to the given state."""
        self._reset_called = True
        self._u = self._ud = self._udd = initial_state
        self._y = self._yd = self._ydd = initial_state

    def process(self, value: SignalT) -> SignalT:
        """Feed one sample and return the filtered output."""
        if not self._reset_called:
            self.reset(value * 0)
        self._ydd = self._yd
        self._yd = self._y
        self._udd = self._ud
        self._ud = self._u
        self._u = value
        self._y = (1.0 / self._a0) * (
            self._u
            + self._b1 * self._ud
            + self._b2 * self._udd
            - self._a1 * self._yd
            - self._a2 * self._ydd
        )
        return self._y

    @property
    def output(self) -> SignalT:
        return self._y

    @property
    def omega(self) -> float:
        return self._omega

    @omega.setter
    def omega(self, omega: float) -> None:
        self._omega = omega
        self._compute_coeff()

    @property
    def damping(self) -> float:
        return self._eps

    @damping.setter
    def damping(self, eps: float) -> None:
        self._eps = eps
        self._compute_coeff()

    @property
    def time_step(self) -> float:
        return self._ts

    @time_step.setter
    def time_step(self, ts: float) -> None:
        self._ts = ts
        self._compute_coeff()


def dynamic_get(index: int, values: Sequence[Any]) -> Any:
    """Return the element at a run-time index of a fixed tuple."""
    if index < 0 or index >= len(values):
        raise IndexError("Tuple element out of range.")
    return values[index]