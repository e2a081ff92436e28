"""Entry point for the pi-readline echo REPL."""

from __future__ import annotations

import argparse
import logging
import sys

EXIT_COMMANDS = ("exit", "quit")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="pi-readline: interactive line editor demo")
    parser.add_argument("--prompt", default="> ", help="Prompt shown before each line (default: '> ')")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    from pi.readline.session import EditSession

    with EditSession() as session:
        while True:
            line = session.read_line(args.prompt)
            if line is None or line in EXIT_COMMANDS:
                break
            session.sink.write(line + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
