#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Lay out JPEG card images from a directory onto printable PDF sheets.
"""

# local repo modules
import proxy_card_sheets.cli


if __name__ == "__main__":
	proxy_card_sheets.cli.main()
