# -*- coding: utf-8 -*-
#
"""Solver components: state vector, RHS kernels, adaptive stepper, driver loop.

Submodules are not automatically imported.
"""
