#!/usr/bin/env python3
"""
Executable entry point for qemu-runner, usable straight from a checkout.

Usage:
    bin/qemu-runner.py <path/to/kernel.elf> [qemu or kernel command line overrides]

It adds the project root to the Python path so the `qemu_runner` package can
be imported without installing it, then runs `qemu_runner.main.main`.
"""

import sys
from pathlib import Path

# The script is in `bin/`, so the project root is two levels up.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from qemu_runner.main import main

if __name__ == "__main__":
    main()
