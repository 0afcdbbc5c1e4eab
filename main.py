import sys

from flux_pushover.cli import main


if __name__ == '__main__':
    sys.exit(main())
