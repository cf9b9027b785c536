"""
Deployment and orchestration package.

This package contains modules for zero-downtime pushing and rolling back
Cloud Foundry applications.
"""

__all__ = ['orchestrator', 'push', 'rollback', 'app_repo', 'utils']
