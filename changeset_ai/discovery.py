"""Package Discovery - Find publishable packages in a workspace."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from changeset_ai import MANIFEST_FILENAME
from changeset_ai.paths import PathError, confine
from changeset_ai.validators import ValidationError, is_valid_package_name

DEFAULT_MAX_MANIFESTS = 1000
EXCLUDED_DIRS = {'node_modules', '.git'}


class DiscoveryError(ValidationError):
    """Raised when the workspace cannot be scanned safely."""
    pass


@dataclass(frozen=True)
class Package:
    """A named, public package found in the workspace."""
    name: str
    path: Path


def find_manifests(root: Path, max_manifests: int = DEFAULT_MAX_MANIFESTS) -> list[Path]:
    """Walk the workspace in sorted order, skipping dependency caches."""
    manifests = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in EXCLUDED_DIRS)
        if MANIFEST_FILENAME in filenames:
            manifests.append(Path(dirpath) / MANIFEST_FILENAME)
            if len(manifests) > max_manifests:
                raise DiscoveryError(
                    f"Found more than {max_manifests} {MANIFEST_FILENAME} files. "
                    "Open a smaller workspace or raise max_manifests in .changesetrc"
                )
    return manifests


def _read_package(manifest: Path, root: Path) -> Package | None:
    """Parse one manifest. Returns None for anything that is not a public package."""
    try:
        manifest = confine(manifest, root)
        data = json.loads(manifest.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, PathError) as e:
        logger.debug("Skipping {}: {}", manifest, e)
        return None

    if not isinstance(data, dict):
        logger.debug("Skipping {}: not a JSON object", manifest)
        return None

    name = data.get('name')
    if not name or data.get('private'):
        return None
    if not is_valid_package_name(name):
        logger.debug("Skipping {}: invalid package name", manifest)
        return None

    try:
        directory = confine(manifest.parent, root)
    except PathError:
        logger.debug("Skipping {}: outside workspace", manifest)
        return None
    return Package(name=name, path=directory)


def discover_packages(root, max_manifests: int = DEFAULT_MAX_MANIFESTS) -> list[Package]:
    """Return public packages in the workspace, root package first, unique by name."""
    root_path = confine(root, root)
    packages: list[Package] = []
    seen: set[str] = set()

    root_manifest = root_path / MANIFEST_FILENAME
    if root_manifest.is_file():
        root_package = _read_package(root_manifest, root_path)
        if root_package:
            packages.append(root_package)
            seen.add(root_package.name)

    for manifest in find_manifests(root_path, max_manifests):
        if manifest.parent == root_path:
            continue
        package = _read_package(manifest, root_path)
        if package and package.name not in seen:
            packages.append(package)
            seen.add(package.name)

    logger.debug("Discovered {} packages under {}", len(packages), root_path)
    return packages
