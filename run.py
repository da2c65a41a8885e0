#!/usr/bin/env python
"""
Start the PM Surya Ghar backend

Usage:
    python run.py                    # default (127.0.0.1:8000)
    python run.py -p 8080            # custom port
    python run.py --host 0.0.0.0     # listen on all interfaces
    python run.py --reload           # auto-reload for development
"""
import argparse
import shutil
from pathlib import Path

import uvicorn
from loguru import logger

ROOT_DIR = Path(__file__).parent


def parse_args():
    parser = argparse.ArgumentParser(
        description="PM Surya Ghar backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-p", "--port",
        type=int,
        default=8000,
        help="port (default: 8000)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="host (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="auto-reload on code changes"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="worker processes (default: 1)"
    )
    return parser.parse_args()


def check_env():
    """Create .env from .env.example on first run."""
    env_file = ROOT_DIR / ".env"
    env_example = ROOT_DIR / ".env.example"

    if not env_file.exists():
        if env_example.exists():
            shutil.copy(env_example, env_file)
            logger.info(".env created from .env.example; set DATABASE_URL and STORAGE_DIR to enable the backend")
        else:
            logger.warning("No .env found, backend not configured")

    data_dir = ROOT_DIR / "data"
    if not data_dir.exists():
        data_dir.mkdir(parents=True)
        logger.info(f"Created {data_dir}")


def main():
    args = parse_args()

    check_env()
    logger.info(f"Serving on http://{args.host}:{args.port} (docs at /docs)")

    uvicorn.run(
        "suryaghar.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers if not args.reload else 1,
        log_level="info",
    )


if __name__ == "__main__":
    main()
