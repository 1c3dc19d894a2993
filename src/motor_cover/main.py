"""Motor Coverage Pro server entry point.

Uses Hydra to load configuration and then starts the FastAPI application
via uvicorn.

Usage::

    python -m motor_cover.main                       # default config
    python -m motor_cover.main server.port=9000      # override
    python -m motor_cover.main rating.third_party_fixed_premium=16000
"""

from __future__ import annotations

import os
from pathlib import Path

import hydra
import uvicorn
from dotenv import load_dotenv
from loguru import logger
from omegaconf import DictConfig, open_dict

from motor_cover.api.app import create_app

# Load .env BEFORE Hydra resolves ${oc.env:...} references
load_dotenv()


def _resolve_data_paths(cfg: DictConfig, launch_dir: Path) -> None:
    """Anchor a relative policy CSV path to the directory the server was launched from.

    Hydra may move the CWD into ``outputs/<date>/<time>/``; the bundled policy
    CSV must still be found.
    """
    policies_csv = Path(cfg.data.policies_csv)
    if not policies_csv.is_absolute():
        with open_dict(cfg):
            cfg.data.policies_csv = str(launch_dir / policies_csv)


@hydra.main(version_base=None, config_path="../../conf", config_name="config")
def main(cfg: DictConfig) -> None:
    """Bootstrap the application from Hydra config and run uvicorn."""
    _resolve_data_paths(cfg, Path(hydra.utils.get_original_cwd()))
    os.chdir(hydra.utils.get_original_cwd())

    app = create_app(cfg)

    host: str = cfg.server.host
    port = int(cfg.server.port)
    debug: bool = cfg.server.debug

    logger.info(
        "Starting server on {host}:{port} (debug={debug})",
        host=host,
        port=port,
        debug=debug,
    )

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="debug" if debug else "info",
    )


if __name__ == "__main__":
    main()
