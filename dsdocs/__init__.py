"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

"""
DSDOCS - Dataset-specific API docs
Narrows a metastore OpenAPI document down to the endpoints of a single dataset
"""

__version__ = "0.1.0"
