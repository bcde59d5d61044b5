"""Defaults for march.

``DEFAULT_MAX_STEPS`` caps how many items a single walk may emit, so walks
over cyclic tables always terminate.
"""

DEFAULT_MAX_STEPS = 1000
