#!/usr/bin/env python3
"""
Deploy plan: the ordered list of steps a request expands to on a given host.

Local sequence (only when this host is one of the target servers):
    vendor -> extensions -> skins -> staging-to-production sync -> l10n
Remote sequence (every other target server, in declared order):
    production tree rsync

Dependency and content updates land in staging before the sync copies them
to production; the l10n rebuild reads production, so it runs after the sync.
"""

from dataclasses import dataclass
from typing import Optional

from ..errors import StepError

DEPENDENCIES = 'dependencies'
EXTENSION = 'extension'
SKIN = 'skin'
LOCAL_SYNC = 'local-sync'
LOCALIZATION = 'localization'
REMOTE_SYNC = 'remote-sync'


@dataclass(frozen=True)
class PlannedStep:
    kind: str
    target: Optional[str] = None
    description: str = ''


@dataclass(frozen=True)
class StepOutcome:
    step: PlannedStep
    succeeded: bool
    error: Optional[StepError] = None


def plan_local_steps(request):
    steps = []
    if request.dependency_update:
        steps.append(PlannedStep(DEPENDENCIES, None, "Updating vendor"))
    for ext in request.extensions:
        steps.append(PlannedStep(EXTENSION, ext, f"Updating extension: {ext}"))
    for skin in request.skins:
        steps.append(PlannedStep(SKIN, skin, f"Updating skin: {skin}"))
    if request.has_local_sync_scope:
        steps.append(PlannedStep(LOCAL_SYNC, None, "Syncing staging to production"))
    if request.localization:
        langs = f" ({', '.join(request.languages)})" if request.languages else ""
        steps.append(PlannedStep(LOCALIZATION, None, f"Rebuilding localization cache{langs}"))
    return steps


def plan_remote_steps(request, hostname):
    steps = []
    seen = {hostname}
    for server in request.servers:
        if server in seen:
            continue
        seen.add(server)
        steps.append(PlannedStep(REMOTE_SYNC, server, f"Syncing to remote server: {server}"))
    return steps


def plan_deploy(request, hostname):
    """Return the ordered PlannedStep list for request when run on hostname."""
    steps = []
    if hostname in request.servers:
        steps += plan_local_steps(request)
    steps += plan_remote_steps(request, hostname)
    return steps


def run_step(step, request, executor):
    """Dispatch one planned step to the executor method for its kind."""
    if step.kind == DEPENDENCIES:
        executor.update_dependencies()
    elif step.kind == EXTENSION:
        executor.update_extension(step.target)
    elif step.kind == SKIN:
        executor.update_skin(step.target)
    elif step.kind == LOCAL_SYNC:
        executor.sync_local(request)
    elif step.kind == LOCALIZATION:
        executor.rebuild_localization(request.languages)
    elif step.kind == REMOTE_SYNC:
        executor.sync_remote(step.target, request)
    else:
        raise ValueError(f"Unknown step kind: {step.kind}")
