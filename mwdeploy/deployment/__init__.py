"""
Deployment and orchestration package.

This package contains modules for scanning the staging inventory, planning
the ordered deploy steps and running them against the app servers.
"""

__all__ = ['orchestrator', 'plan', 'inventory', 'utils']
