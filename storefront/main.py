from __future__ import annotations

import argparse
from typing import List, Optional

import uvicorn

from .config import load_settings
from .logger import get_logger
from .service import create_app
from .storage import MemStorage


def build_parser(defaults=None) -> argparse.ArgumentParser:
    cfg = defaults or load_settings()
    parser = argparse.ArgumentParser(description="Serve the pharmacy storefront API.")
    parser.add_argument("--host", default=cfg.host, help=f"Bind address (default: {cfg.host})")
    parser.add_argument("--port", type=int, default=cfg.port, help=f"Port (default: {cfg.port})")
    parser.add_argument(
        "--seed",
        default=str(cfg.seed_path),
        help="Path to the seed catalog YAML file",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    cfg = load_settings()
    args = build_parser(cfg).parse_args(argv)
    logger = get_logger("storefront")

    storage = MemStorage.from_seed_file(args.seed)
    app = create_app(storage=storage, app_settings=cfg)

    logger.info("Serving storefront API on http://%s:%d%s", args.host, args.port, cfg.api_prefix)
    uvicorn.run(app, host=args.host, port=args.port, log_level=cfg.log_level.lower())


if __name__ == "__main__":
    main()
