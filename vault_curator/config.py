"""Configuration loading and vault registry."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml

from vault_curator.constants import CONFIG_ENV_VAR, CONFIG_PATH, DEFAULT_IGNORE_PATTERNS
from vault_curator.data_models import VaultConfiguration, VaultMetadata

logger = logging.getLogger(__name__)


def _read_patterns(raw: object, where: str) -> tuple[str, ...]:
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise ValueError(f"'ignore_patterns' in {where} must be a list of glob strings")
    return tuple(raw)


def resolve_config_path() -> Path:
    """Return the configuration path, honouring ``VAULT_CURATOR_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_PATH


def load_vault_configuration(config_path: Optional[Path] = None) -> VaultConfiguration:
    """Load and validate the vault configuration file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to the
            ``VAULT_CURATOR_CONFIG`` environment variable, then ``vaults.yaml``
            next to the package.

    Returns:
        A fully populated :class:`VaultConfiguration` containing normalized vault
        metadata and the configured default vault name.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file exists but does not provide the expected structure
            (missing default, empty mapping, invalid entries, etc.).
    """
    config_path = config_path or resolve_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw_config, dict):
        raise ValueError("Vault configuration must be a YAML mapping")

    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Vault configuration must include a non-empty 'vaults' mapping")

    shared_patterns = DEFAULT_IGNORE_PATTERNS
    if "ignore_patterns" in raw_config:
        shared_patterns = _read_patterns(raw_config["ignore_patterns"], "configuration")

    processed: dict[str, VaultMetadata] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")

        resolved_path = Path(raw_path).expanduser()
        try:
            resolved_path = resolved_path.resolve(strict=False)
        except RuntimeError:
            # resolve can raise on symlink loops; keep the expanded path
            logger.warning("Could not resolve path for vault '%s': %s", name, raw_path)

        patterns = shared_patterns
        if "ignore_patterns" in entry:
            patterns = _read_patterns(entry["ignore_patterns"], f"vault '{name}'")

        processed[name] = VaultMetadata(
            name=name,
            path=resolved_path,
            description=str(entry.get("description") or "").strip(),
            exists=resolved_path.is_dir(),
            ignore_patterns=patterns,
        )

    default_vault = raw_config.get("default")
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ValueError("Vault configuration must specify a 'default' vault present in the mapping")

    logger.info("Loaded %d vault(s) from %s (default '%s')", len(processed), config_path, default_vault)
    return VaultConfiguration(default_vault=default_vault, vaults=processed)


@lru_cache(maxsize=1)
def get_vault_configuration() -> VaultConfiguration:
    """Load the configuration on first use and cache it for the process."""
    return load_vault_configuration()
