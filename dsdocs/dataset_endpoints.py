"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger("dsdocs.dataset_endpoints")

IDENTIFIER_PLACEHOLDER = "{identifier}"
IDENTIFIER_PARAMETER = "identifier"


def modify_dataset_endpoints(
    paths: Dict[str, Dict[str, Any]], identifier: str
) -> Dict[str, Dict[str, Any]]:
    """Make the generic dataset endpoints specific to one dataset.

    Args:
        paths: Paths and operations of the (already filtered) spec
        identifier: Dataset uuid

    Returns:
        New paths mapping with the dataset identifier substituted
    """
    modified = {}
    for path, operations in paths.items():
        new_path, new_operations = modify_dataset_endpoint(path, operations, identifier)
        modified[new_path] = new_operations
    return modified


def modify_dataset_endpoint(
    path: str, operations: Dict[str, Any], identifier: str
) -> Tuple[str, Dict[str, Any]]:
    """Rewrite a single path and its operations for ``identifier``.

    The path is left untouched unless at least one operation carries an
    ``identifier`` parameter with an example value.
    """
    new_operations = _new_operations(operations, identifier)
    if new_operations is None:
        return path, operations

    new_path = path.replace(IDENTIFIER_PLACEHOLDER, identifier)
    logger.debug(f"Rewrote {path} to {new_path}")
    return new_path, new_operations


def _new_operations(operations: Dict[str, Any], identifier: str) -> Optional[Dict[str, Any]]:
    modified = False
    new_operations = dict(operations)
    for method, info in operations.items():
        if not isinstance(info, dict):
            continue
        new_parameters = _new_parameters(info.get("parameters", []), identifier)
        if new_parameters is not None:
            new_operations[method] = {**info, "parameters": new_parameters}
            modified = True

    return new_operations if modified else None


def _new_parameters(parameters: List[Dict[str, Any]], identifier: str) -> Optional[List[Dict[str, Any]]]:
    modified = False
    new_parameters = []
    for parameter in parameters:
        if (
            isinstance(parameter, dict)
            and parameter.get("name") == IDENTIFIER_PARAMETER
            and "example" in parameter
        ):
            parameter = copy.deepcopy(parameter)
            parameter["example"] = identifier
            modified = True
        new_parameters.append(parameter)

    return new_parameters if modified else None
