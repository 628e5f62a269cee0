#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Allow running the tool as ``python -m amldtb``."""

from amldtb.apps.amldtb import safe_main

if __name__ == "__main__":
    safe_main()
