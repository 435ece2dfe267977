# -*- coding: utf-8 -*-
#
"""Fixed-size real-valued state vector.

The stepper writes into the vector's storage in place; the caller owns the
vector and must destroy it exactly once (or use it as a context manager).
"""

import numpy as np

from .types import DTYPE


class StateVector:
    """Fixed-size container for the state of a first-order ODE system.

    Constructed from a literal sequence, e.g. StateVector([0.355, -0.259]).
    The length cannot change afterwards.
    """

    def __init__(self, data):
        data = np.array(data, dtype=DTYPE, order="C")  # always a copy
        if data.ndim != 1:
            raise ValueError("State vector data must be rank-1, got shape %s" % (data.shape,))
        if data.shape[0] == 0:
            raise ValueError("State vector must have at least one component")
        self._data = data
        self._n    = data.shape[0]

    def _check_alive(self):
        if self._data is None:
            raise RuntimeError("State vector has been destroyed")

    @property
    def destroyed(self):
        return self._data is None

    @property
    def data(self):
        """The underlying rank-1 np.array (live view, not a copy)."""
        self._check_alive()
        return self._data

    def copy_values(self):
        """Return a snapshot of the current values as a new np.array."""
        self._check_alive()
        return self._data.copy()

    def destroy(self):
        """Release the storage. Must be called exactly once."""
        self._check_alive()
        self._data = None

    # syntactic sugar

    def __len__(self):
        return self._n

    def __iter__(self):
        self._check_alive()
        return iter(self._data)

    def __getitem__(self, i):
        self._check_alive()
        return self._data[i]

    def __setitem__(self, i, value):
        self._check_alive()
        self._data[i] = value

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if not self.destroyed:
            self.destroy()
        return False

    def __repr__(self):
        if self._data is None:
            return "StateVector(<destroyed>)"
        return "StateVector(%s)" % (self._data.tolist(),)
