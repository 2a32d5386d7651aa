#!/usr/bin/env python3
"""
Main entry point for running struct-infer CLI as a module.

This allows running: python -m struct_infer.cli
"""
from __future__ import annotations

import sys

from . import main

if __name__ == "__main__":
    sys.exit(main())
