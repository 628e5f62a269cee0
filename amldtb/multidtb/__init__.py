#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Amlogic multi-DTB image support.

The image bundles several device tree blobs, each tagged with a
``chipset-platform-variant`` identifier, behind an ``AML_`` entry table.
"""
