"""Process-wide order number sequence."""

import threading

from animalshop.config import ORDER_NUMBER_SEED


class OrderNumberSequence:
    """Monotonic counter; the first number handed out is ``seed + 1``."""

    def __init__(self, seed: int = ORDER_NUMBER_SEED):
        self._lock = threading.Lock()
        self._seed = seed
        self._current = seed

    def next(self) -> int:
        with self._lock:
            self._current += 1
            return self._current

    def reset(self, seed: int | None = None) -> None:
        with self._lock:
            if seed is not None:
                self._seed = seed
            self._current = self._seed


order_numbers = OrderNumberSequence()
