#!/usr/bin/env python3
"""
Executor factory and package exports.
"""

from .base import BaseExecutor
from .dryrun import DryRunExecutor
from .local import CommandFailed, LocalExecutor


def get_executor(config, dry_run=False):
    """
    Factory function to create appropriate executor.

    Args:
        config: Deploy configuration dict
        dry_run: Print commands instead of running them

    Returns:
        LocalExecutor or DryRunExecutor instance
    """
    if dry_run:
        return DryRunExecutor(config)
    return LocalExecutor(config)


# Package exports
__all__ = ['BaseExecutor', 'CommandFailed', 'DryRunExecutor', 'LocalExecutor', 'get_executor']
