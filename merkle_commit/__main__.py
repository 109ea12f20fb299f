import sys

from merkle_commit.cli import main

if __name__ == "__main__":
    sys.exit(main())
