"""
cf-autopilot: zero-downtime push and rollback for Cloud Foundry applications.
"""

__version__ = '0.0.3'
