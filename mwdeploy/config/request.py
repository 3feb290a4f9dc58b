#!/usr/bin/env python3
"""
Deploy request model.

A DeployRequest is built once per run by build_request(), which applies the
--upgrade-world shorthand and the "all" server sentinel before freezing the
value. Validation always runs against the expanded request.
"""

from dataclasses import dataclass
from typing import Tuple

ALL_SERVERS = 'all'


@dataclass(frozen=True)
class DeployRequest:
    dependency_update: bool = False
    full_upgrade: bool = False
    extensions: Tuple[str, ...] = ()
    skins: Tuple[str, ...] = ()
    localization: bool = False
    languages: Tuple[str, ...] = ()
    servers: Tuple[str, ...] = ()
    bypass_timestamp_sync: bool = False
    continue_on_error: bool = False

    @property
    def rsync_mode(self):
        return '--inplace' if self.bypass_timestamp_sync else '--update'

    @property
    def has_local_sync_scope(self):
        return bool(self.dependency_update or self.extensions or self.skins)


def _unique(items):
    """De-duplicate while keeping first-seen order."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return tuple(result)


def expand_servers(servers, roster):
    """Replace the "all" sentinel with the full server roster."""
    expanded = []
    for server in servers:
        if server == ALL_SERVERS:
            expanded.extend(roster)
        else:
            expanded.append(server)
    return _unique(expanded)


def build_request(inventory, roster, extensions=(), skins=(), dependency_update=False,
                  full_upgrade=False, localization=False, languages=(), servers=(),
                  bypass_timestamp_sync=False, continue_on_error=False):
    """
    Build the final, expanded DeployRequest.

    full_upgrade selects every extension and skin in the inventory and turns
    on dependency update, localization rebuild and timestamp bypass.
    """
    if full_upgrade:
        extensions = inventory.extensions
        skins = inventory.skins
        dependency_update = True
        localization = True
        bypass_timestamp_sync = True

    return DeployRequest(
        dependency_update=bool(dependency_update),
        full_upgrade=bool(full_upgrade),
        extensions=_unique(extensions),
        skins=_unique(skins),
        localization=bool(localization),
        languages=_unique(languages),
        servers=expand_servers(servers, roster),
        bypass_timestamp_sync=bool(bypass_timestamp_sync),
        continue_on_error=bool(continue_on_error),
    )
