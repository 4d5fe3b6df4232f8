"""Main entry point for the YanAlgorithm task recommender."""

import sys

from yanalgorithm.cli import main


if __name__ == "__main__":
    sys.exit(main())
