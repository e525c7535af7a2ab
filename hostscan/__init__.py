"""hostscan: find pods running with hostNetwork across a fleet of clusters."""

__version__ = "0.1.0"
