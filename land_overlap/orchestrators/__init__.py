"""Recomputation orchestration.

- dashboard: pure ``recompute`` pass and the ``DashboardSession`` hosting shell
"""
