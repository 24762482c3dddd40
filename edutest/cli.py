"""Command that opens the database and serves the web application."""

from __future__ import annotations

import argparse
import sqlite3

from edutest.api.router import create_app
from edutest.logs import init_logger
from edutest.pdf import DEFAULT_PDF_DIR
from edutest.service.core import build_service
from edutest.storage.storage import open_storage


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="edutest", description="Serve the test-taking API.")
    parser.add_argument("--db", default="edutest.db", help="database file")
    parser.add_argument("--log-file", default="app.log", help="JSON-lines log file")
    parser.add_argument("--pdf-dir", default=DEFAULT_PDF_DIR, help="where test PDFs are kept")
    parser.add_argument("--upload-dir", default=".", help="where uploaded files are saved")
    parser.add_argument("--host", default="127.0.0.1", help="address to listen on")
    parser.add_argument("--port", type=int, default=8080, help="port to listen on")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Start the server; return a non-zero status if it cannot start."""
    args = _parser().parse_args(argv)
    logger = init_logger(args.log_file)

    try:
        storage = open_storage(args.db, logger)
    except sqlite3.Error as exc:
        logger.error(f"Error is connect database: {exc}")
        return 1

    with storage:
        service = build_service(storage, logger, args.pdf_dir)
        app = create_app(service, logger, args.upload_dir)
        try:
            app.run(host=args.host, port=args.port)
        except OSError as exc:
            logger.error(f"Error is run router: {exc}")
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())