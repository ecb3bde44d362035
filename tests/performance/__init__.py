"""Performance tests for server-matchers.

These tests time real callables with the system clock:
- Adaptive benchmark verdicts for known per-call costs
- Stability of repeated calibration
- Deadline enforcement against real sleeps
"""
