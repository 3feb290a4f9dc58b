#!/usr/bin/env python3
"""
Base executor interface for deploy steps.
"""


class BaseExecutor:
    """Interface for deploy step executors (subprocess, dry-run, test fakes).

    Each method performs one step and raises the matching StepError
    subclass on failure.
    """

    def update_dependencies(self):
        """Reset and pull the staging vendor checkout, then run composer."""
        raise NotImplementedError("Subclasses must implement update_dependencies()")

    def update_extension(self, name):
        raise NotImplementedError("Subclasses must implement update_extension()")

    def update_skin(self, name):
        raise NotImplementedError("Subclasses must implement update_skin()")

    def sync_local(self, request):
        """
        Mirror staging subtrees into production.

        Args:
            request: DeployRequest; vendor, extensions and skins in it decide
                which subtrees are copied, bypass_timestamp_sync the rsync mode
        """
        raise NotImplementedError("Subclasses must implement sync_local()")

    def rebuild_localization(self, languages=()):
        raise NotImplementedError("Subclasses must implement rebuild_localization()")

    def sync_remote(self, server, request):
        """Mirror the whole production tree to the same path on server."""
        raise NotImplementedError("Subclasses must implement sync_remote()")
