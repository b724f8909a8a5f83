"""
Run a CHIP-8 ROM: python main.py path/to/rom.ch8 [--headless] [--freq 700]
"""

import sys

from chip8vm.cli import main

if __name__ == "__main__":
    sys.exit(main())
