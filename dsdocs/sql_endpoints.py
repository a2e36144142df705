"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Expansion of the generic datastore SQL endpoint into one documented path
per distribution of a dataset.

The generated queries are documentation examples only. The distribution
identifier is interpolated as-is and nothing here builds executable SQL.
"""

import copy
import logging
from typing import Any, Callable, Dict, Sequence, Tuple

from dsdocs.data_modifiers import DataModifierManager
from dsdocs.models import Distribution

logger = logging.getLogger("dsdocs.sql_endpoints")

SQL_PATH_MARKER = "sql"
QUERY_PARAMETER = "query"
MODIFIER_ENTITY_TYPE = "distribution"

DistributionsLookup = Callable[[str], Sequence[Distribution]]


def build_sql_example(distribution_id: str) -> str:
    """Example query string selecting everything from a distribution's table."""
    return f"[SELECT * FROM {distribution_id}];"


def get_sql_paths_and_operations(paths: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Return the subset of ``paths`` that document the SQL endpoint."""
    return {path: operations for path, operations in paths.items() if SQL_PATH_MARKER in path}


def remove_sql_endpoint_paths(paths: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Return ``paths`` without any SQL endpoint."""
    return {path: operations for path, operations in paths.items() if SQL_PATH_MARKER not in path}


def modify_sql_endpoint(
    path: str,
    operations: Dict[str, Any],
    distribution: Distribution,
    query: Dict[str, Any],
) -> Tuple[str, Dict[str, Any]]:
    """Build the documented path and operations for one distribution."""
    example = build_sql_example(distribution.identifier)
    new_path = f"{path}?{QUERY_PARAMETER}={example}"

    new_query = copy.deepcopy(query)
    new_query["example"] = example

    new_operations = copy.deepcopy(operations)
    new_operations.setdefault("get", {})["parameters"] = [new_query]
    return new_path, new_operations


def modify_sql_endpoints(
    paths: Dict[str, Dict[str, Any]],
    identifier: str,
    parameters: Dict[str, Any],
    modifiers: DataModifierManager,
    get_distributions: DistributionsLookup,
) -> Dict[str, Dict[str, Any]]:
    """Make the generic SQL endpoint specific to the dataset's distributions.

    Args:
        paths: Paths and operations of the (already filtered) spec
        identifier: Dataset uuid
        parameters: ``components.parameters`` of the spec, holding the ``query`` template
        modifiers: Data modifier plugins consulted before exposing distributions
        get_distributions: Callable returning the dataset's distributions

    Returns:
        New paths mapping with one SQL path per distribution, or no SQL path
        at all when a modifier requires the data to be protected
    """
    if modifiers.requires_modification(MODIFIER_ENTITY_TYPE, identifier):
        logger.info(f"SQL endpoint docs suppressed for dataset {identifier}")
        return remove_sql_endpoint_paths(paths)

    sql_paths = get_sql_paths_and_operations(paths)
    if not sql_paths:
        return dict(paths)

    query = parameters[QUERY_PARAMETER]
    distributions = list(get_distributions(identifier))

    modified = remove_sql_endpoint_paths(paths)
    for path, operations in sql_paths.items():
        for distribution in distributions:
            new_path, new_operations = modify_sql_endpoint(path, operations, distribution, query)
            modified[new_path] = new_operations

    logger.info(
        f"Generated {len(sql_paths) * len(distributions)} SQL paths "
        f"for {len(distributions)} distributions of dataset {identifier}"
    )
    return modified
