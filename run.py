# -*- coding: utf-8 -*-

"""
Main entry point for running grayscale-svg from a source checkout.
"""

import logging
import sys

from grayscale_svg.cli import main

if __name__ == '__main__':
    exit_code = main()
    logging.getLogger("grayscale_svg").debug("===== Conversion run terminated =====")
    sys.exit(exit_code)
