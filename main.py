"""Run the emulator from a source checkout: python main.py load <program>."""

import sys

from chipvm.cli import main

if __name__ == "__main__":
    sys.exit(main())
