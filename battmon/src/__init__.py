"""
Battery monitor package for status bars.

Reads raw charge/energy/power counters from the Linux power-supply sysfs
tree, aggregates up to three batteries into one reading, and renders it as a
single status line on every refresh cycle.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""
