#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Convert pasted CSV/TSV records into Avery 5160 label sheets.
"""

import label_sheet_printer.cli


if __name__ == "__main__":
	label_sheet_printer.cli.main()
