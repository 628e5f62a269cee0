#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Version of the amldtb package."""

__version__ = "0.2.0"
