#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Generate Avery label sheets for school lunch orders.
"""

import sys

import lunch_label_formatter.cli


if __name__ == "__main__":
	sys.exit(lunch_label_formatter.cli.main())
