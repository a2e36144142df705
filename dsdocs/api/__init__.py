"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""
