"""Site directory registry and provisioning for sitebox."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from sitebox.models import SiteSpec

logger = logging.getLogger(__name__)

SITE_CONFIG_NAME = "sitebox.yaml"
PUBLIC_DIR_NAME = "public"


class SiteError(Exception):
    """Site provisioning error."""
    pass


class SiteRegistry:
    """Reads and writes the site directories under ``sites_directory``."""

    def __init__(self, sites_directory: Path):
        self.sites_directory = Path(sites_directory)

    def site_path(self, name: str) -> Path:
        return self.sites_directory / name

    def site_exists(self, name: str) -> bool:
        try:
            return self.site_path(name).exists()
        except OSError as e:
            # e.g. ENAMETOOLONG; nothing can exist under such a name
            logger.debug("Could not check site %s: %s", name, e)
            return False

    def create_site(self, name: str, spec: SiteSpec) -> Path:
        """Create the site directory tree and write its config."""
        site_dir = self.site_path(name)
        if self.site_exists(name):
            raise SiteError(f'The site directory "{name}" already exists.')
        try:
            (site_dir / PUBLIC_DIR_NAME).mkdir(parents=True)
        except OSError as e:
            raise SiteError(f"Could not create site directory {site_dir}: {e}") from e
        logger.info("Created site directory %s", site_dir)
        self._write_site_config(site_dir, spec)
        return site_dir

    def update_sites_nginx_config(self, name: str, spec: SiteSpec) -> Path:
        """Rewrite the serving config of a site, leaving its content alone."""
        site_dir = self.site_path(name)
        try:
            site_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SiteError(f"Could not create site directory {site_dir}: {e}") from e
        self._write_site_config(site_dir, spec)
        return site_dir

    def _write_site_config(self, site_dir: Path, spec: SiteSpec) -> None:
        config_path = site_dir / SITE_CONFIG_NAME
        try:
            with open(config_path, "w") as f:
                yaml.dump(spec.to_config(), f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise SiteError(f"Could not write site config {config_path}: {e}") from e
        logger.info("Wrote site config %s", config_path)
