#!/usr/bin/env python3
"""
Inventory of deployable extensions and skins.

An extension or skin is deployable when it is a directory under the staging
tree that holds a .git marker. The inventory is recomputed on every run.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from ..errors import DiscoveryError


@dataclass(frozen=True)
class Inventory:
    extensions: Tuple[str, ...] = ()
    skins: Tuple[str, ...] = ()


def _list_repositories(directory):
    directory = Path(directory)
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise DiscoveryError(f"cannot read {directory}: {e.strerror or e}") from e

    return tuple(sorted(
        entry.name for entry in entries
        if entry.is_dir() and (entry / ".git").exists()
    ))


def list_extensions(staging_path):
    return _list_repositories(Path(staging_path) / "extensions")


def list_skins(staging_path):
    return _list_repositories(Path(staging_path) / "skins")


def load_inventory(config):
    """Scan the staging tree named in config['deployment']['staging_path']."""
    staging_path = config['deployment']['staging_path']
    return Inventory(
        extensions=list_extensions(staging_path),
        skins=list_skins(staging_path),
    )
