"""
Dashboard module - Gauge readouts for presentation layers.
"""

from drivesim.dashboard.gauges import Dashboard, DashboardConfig, DashboardReadout

__all__ = [
    "Dashboard",
    "DashboardConfig",
    "DashboardReadout",
]
