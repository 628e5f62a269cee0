#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""amldtb command line applications."""
