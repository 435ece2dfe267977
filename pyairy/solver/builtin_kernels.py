# -*- coding: utf-8 -*-
#
"""Built-in kernels.

The Airy equation  u'' = t u  is reduced to the first-order system

    u1' = u2
    u2' = t u1

where u1 = u and u2 = u'.
"""

import numpy as np

from .types import DTYPE
from .kernel_interface import Kernel


def airy_rhs(t, w):
    """Return the derivative [w[1], t*w[0]] of the Airy system as a new np.array."""
    return np.array( [w[1], t * w[0]], dtype=DTYPE )


class AiryKernel(Kernel):
    """The Airy system as a kernel (n = 2)."""

    def __init__(self):
        Kernel.__init__(self, n=2)

    def callback(self, t, w, out):
        out[0] = w[1]
        out[1] = t * w[0]
