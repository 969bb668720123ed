"""Allow running dumpcheck as ``python -m dumpcheck``."""

from dumpcheck.cli import main

if __name__ == "__main__":
    main()
