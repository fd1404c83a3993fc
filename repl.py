import argparse
import logging
import sys
from pathlib import Path

from spancalc.errors import CalcError
from spancalc.session import Session

PROMPT = "< "
OUTPUT_PREFIX = "> "
EXIT_COMMAND = ":q"

logger = logging.getLogger(__name__)


def run_line(session: Session, line: str) -> bool:
    try:
        session.run(line)
    except CalcError as e:
        print()
        print(e.render(line))
        return False
    finally:
        print()
    return True


def run_scripts(session: Session, scripts: list[Path]) -> int:
    for script in scripts:
        logger.info("Running %s", script)
        for line in script.read_text().splitlines():
            if not line.strip():
                continue
            print(OUTPUT_PREFIX, end="")
            if not run_line(session, line):
                return 1
    return 0


def interactive(session: Session) -> int:
    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        if line.startswith(EXIT_COMMAND):
            return 0

        print(OUTPUT_PREFIX, end="")
        run_line(session, line)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Line-oriented calculator: = + - * / ( ) % ;")
    parser.add_argument("scripts", nargs="*", type=Path, help="Files to run line by line instead of the REPL")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug information to stderr")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    session = Session()
    if args.scripts:
        sys.exit(run_scripts(session, args.scripts))
    sys.exit(interactive(session))
