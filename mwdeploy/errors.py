#!/usr/bin/env python3
"""
Error types raised by the deploy pipeline.

Configuration and discovery errors stop a run before any step executes.
Step errors are raised by executors; the orchestrator either re-raises them
(fail-fast) or collects them into a DeploymentFailed (continue-on-error).
"""


class DeployToolError(Exception):
    """Base class for all mwdeploy errors."""


class ConfigurationError(DeployToolError):
    """The request or config file is not acceptable; nothing was executed."""


class UnknownTarget(ConfigurationError):
    def __init__(self, kind, name):
        self.kind = kind
        self.name = name
        super().__init__(f"invalid {kind}: {name}")


class NoServersSpecified(ConfigurationError):
    def __init__(self):
        super().__init__("at least one server required")


class LanguageWithoutLocalization(ConfigurationError):
    def __init__(self):
        super().__init__("--lang requires --l10n flag")


class InvalidConfigFile(ConfigurationError):
    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"invalid config file {path}: {reason}")


class DiscoveryError(DeployToolError):
    """Inventory scan failed."""


class StepError(DeployToolError):
    """A single deploy step failed."""


class DependencyUpdateFailed(StepError):
    pass


class ExtensionUpdateFailed(StepError):
    def __init__(self, name, reason):
        self.name = name
        super().__init__(f"failed to update extension {name}: {reason}")


class SkinUpdateFailed(StepError):
    def __init__(self, name, reason):
        self.name = name
        super().__init__(f"failed to update skin {name}: {reason}")


class LocalSyncFailed(StepError):
    pass


class LocalizationRebuildFailed(StepError):
    pass


class RemoteSyncFailed(StepError):
    def __init__(self, server, reason):
        self.server = server
        super().__init__(f"failed to sync to {server}: {reason}")


class DeploymentFailed(DeployToolError):
    """One or more steps failed while continue-on-error was set."""

    def __init__(self, failures):
        self.failures = list(failures)
        super().__init__(f"deployment completed with errors ({len(self.failures)} failed step(s))")
