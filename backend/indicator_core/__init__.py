"""Indicator engine for the pair-signal dashboard.

This package contains pure computation with no I/O dependencies
(no database, network or chart rendering). Every function takes
in-memory price sequences and returns freshly built, time-aligned
series; nothing is cached or persisted between calls.
"""
