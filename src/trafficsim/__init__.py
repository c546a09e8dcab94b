"""
trafficsim: Smart-traffic junction grid simulator

A discrete-time simulation of congestion on a grid of road junctions,
built to feed an operations dashboard.

Core concepts:
- Junctions accumulate congestion under random noise
- Scenarios (rush hour, accident, event) bias and scale that noise
- Congested junctions throttle the roads flowing into them
- Dispatched units push a junction's congestion back down
- Overall health is the mean headroom across all junctions
"""

__version__ = "0.1.0"
