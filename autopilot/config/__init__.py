"""
Configuration validation package.

This package contains the JSON schemas and validators for the autopilot
config file and for cf application manifests.
"""

__all__ = ['validation']
