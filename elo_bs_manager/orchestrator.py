from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from .installer import DEPLOY_ACTION, INSTALL_ENTRYPOINT, Installer, ScriptArguments
from .lib.download import download_to_file, local_filename
from .settings import BaseConfig, ConfigurationError, SetupConfig, validate_properties

logger = logging.getLogger(__name__)

Fetch = Callable[[str, Path], Path]
InstallerFactory = Callable[[], Installer]


def setup_business_solutions(
    config: SetupConfig,
    *,
    installer_factory: InstallerFactory,
    fetch: Fetch = download_to_file,
) -> None:
    """Download every configured package and deploy it, in list order.

    Missing credentials abort the run before any download. A package that
    cannot be downloaded is logged and skipped; the rest still run.
    """

    logger.info("validate properties")
    base_config = validate_properties(config.properties)
    if config.bs_urls is None:
        raise ConfigurationError("bsUrls is not set")

    logger.info("setup business solutions")
    for bs_url in config.bs_urls:
        try:
            logger.info("download BS from %s", bs_url)
            destination = config.downloads_dir / local_filename(bs_url)
            fetch(bs_url, destination)
        except OSError as e:
            logger.error("Failed to install BS from %s: %s", bs_url, e)
            continue

        logger.info("install BS from %s", destination.resolve())
        install(config, destination, base_config, installer_factory())


def install(
    config: SetupConfig,
    eloinst: Path,
    base_config: BaseConfig,
    installer: Installer,
) -> None:
    logger.info("install package %s", eloinst.name)

    installer.set_base_config(base_config)
    arguments = ScriptArguments.of(
        DEPLOY_ACTION,
        eloinst.resolve(),
        config.work_dir,
    )
    installer.run(INSTALL_ENTRYPOINT, arguments)
