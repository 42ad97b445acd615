#!/usr/bin/env python3
"""
PyColorCode - Character Color Editor
Main entry point when running from a checkout
"""

from colorcode.main import main


if __name__ == '__main__':
    main()
