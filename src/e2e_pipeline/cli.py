import argparse
import logging
import sys
from typing import List, Optional

from .launcher import TestLauncher
from .runner.run_config import DEFAULT_SUITE_RETRIES
from .server.config import STATIC_ROOT, ServerConfig
from .server.static_server import StaticServer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="e2e-pipeline",
        description="Serve static files and run browser suites against them.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log HTTP requests")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="serve the static root until interrupted")
    serve.add_argument("--port", type=int, default=None, help="defaults to $PORT or 9080")
    serve.add_argument("--root", default=None, help="directory to serve")

    test = commands.add_parser("test", help="serve the static root and run the browser suites")
    test.add_argument("--config", default=None, help="automation config file")
    test.add_argument("--retries", type=int, default=DEFAULT_SUITE_RETRIES)
    test.add_argument("--root", default=None, help="directory to serve")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "serve" and args.port is not None:
        config = ServerConfig(port=args.port, static_root=args.root or STATIC_ROOT)
    else:
        config = ServerConfig.from_env(static_root=args.root)

    if args.command == "serve":
        StaticServer(config).serve_forever()
        return 0

    launcher = TestLauncher(
        server_config=config, config_path=args.config, suite_retries=args.retries
    )
    return launcher.run()


if __name__ == "__main__":
    sys.exit(main())
