# -*- coding: utf-8 -*-
#
"""Interface for right-hand-side kernels  w' = f(t, w).

A kernel is a callable object: kernel(t, w) returns a new array containing
f(t, w). A custom kernel only needs to override callback(), which writes the
derivative into the given output array.

The output array is allocated separately for each call, so a kernel keeps
no mutable state between calls. The stepper may call it any number of
times, also repeatedly at the same t during trial steps.
"""

import numpy as np

from .types import DTYPE


class Kernel:
    """Base class for RHS kernels of first-order systems with n DOFs."""

    def __init__(self, n):
        if n < 1:
            raise ValueError("n must be >= 1, got %d" % n)
        self.n = n

    def callback(self, t, w, out):
        """Compute f(t, w), writing the result into out (rank-1 np.array of length n).

        Override this in derived classes.
        """
        raise NotImplementedError("Kernel.callback() must be overridden in a derived class")

    def __call__(self, t, w):
        if np.shape(w) != (self.n,):
            raise ValueError("Expected state of length %d, got shape %s" % (self.n, np.shape(w)))
        out = np.empty( (self.n,), dtype=DTYPE )
        self.callback(t, w, out)
        return out


class PythonKernel(Kernel):
    """Kernel wrapping a plain function  func(t, w, *args) -> array-like  of length n.

    Any context the function needs is passed explicitly in args.
    """

    def __init__(self, n, func, *args):
        Kernel.__init__(self, n)

        if not callable(func):
            raise TypeError("func must be callable, got %s" % type(func).__name__)
        self.func = func
        self.args = args

    def callback(self, t, w, out):
        out[:] = self.func(t, w, *self.args)
