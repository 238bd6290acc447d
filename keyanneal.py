import sys

import command
from session import Session

def main(argv: list[str] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    session_ = Session()
    for item in session_.startup_messages:
        session_.say(*item)
    if not argv:
        argv = ["help"]
    for name, args in session_.parse_command(argv):
        command.run_command(name, args, session_)
    return 0

if __name__ == "__main__":
    sys.exit(main())
