"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Allow-list filtering of OpenAPI paths and operations.

Any combination of a path and one of its operations not listed in the
allow-list is discarded.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

logger = logging.getLogger("dsdocs.endpoint_filter")

DEFAULT_ENDPOINTS_TO_KEEP: Dict[str, List[str]] = {
    "metastore/schemas/dataset/items/{identifier}": ["get"],
    "datastore/sql": ["get"],
}


def _segments(path: str) -> List[str]:
    return [segment for segment in path.split("/") if segment]


def path_matches_pattern(path: str, pattern: str) -> bool:
    """Return True if the trailing segments of ``path`` are exactly ``pattern``.

    Any prefix such as ``/api/1`` is allowed in front of the pattern, but a
    sub-path (the pattern followed by more segments) never matches.

    >>> path_matches_pattern("/api/1/datastore/sql", "datastore/sql")
    True
    >>> path_matches_pattern("/api/1/datastore/sql/extra", "datastore/sql")
    False
    """
    path_segments = _segments(path)
    pattern_segments = _segments(pattern)
    if not pattern_segments or len(pattern_segments) > len(path_segments):
        return False
    return path_segments[-len(pattern_segments):] == pattern_segments


def find_keep_pattern(path: str, endpoints_to_keep: Mapping[str, Sequence[str]]) -> Optional[str]:
    """Return the first allow-list pattern matching ``path``, or None."""
    for pattern in endpoints_to_keep:
        if path_matches_pattern(path, pattern):
            return pattern
    return None


def keep_dataset_specific_endpoints(
    paths: Mapping[str, Dict[str, Any]],
    endpoints_to_keep: Mapping[str, Sequence[str]] = DEFAULT_ENDPOINTS_TO_KEEP,
) -> Dict[str, Dict[str, Any]]:
    """Keep only paths and operations relevant for dataset-specific docs.

    Args:
        paths: The ``paths`` mapping of the full spec
        endpoints_to_keep: Mapping of path pattern to permitted HTTP methods

    Returns:
        New paths mapping holding only allow-listed (path, method) pairs
    """
    kept: Dict[str, Dict[str, Any]] = {}

    for path, operations in paths.items():
        pattern = find_keep_pattern(path, endpoints_to_keep)
        if pattern is None:
            logger.debug(f"Dropping path {path}")
            continue

        allowed = {method.lower() for method in endpoints_to_keep[pattern]}
        kept_operations = {}
        for method, operation in operations.items():
            if method.lower() in allowed:
                kept_operations[method] = operation
            else:
                logger.debug(f"Dropping {method.upper()} {path}")
        kept[path] = kept_operations

    logger.debug(f"Kept {len(kept)} of {len(paths)} paths")
    return kept
