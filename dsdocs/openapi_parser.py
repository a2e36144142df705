"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

# Set up module logger
logger = logging.getLogger("dsdocs.openapi_parser")

HTTP_METHODS = ["get", "post", "put", "patch", "delete", "head", "options", "trace"]


class SpecLoadError(Exception):
    """Raised when the OpenAPI document cannot be read or has no paths."""


def load_openapi_spec(spec_path: Path) -> Dict[str, Any]:
    """Load and parse an OpenAPI specification file.

    YAML is a superset of JSON, so both serializations are accepted.

    Args:
        spec_path: Path to the OpenAPI YAML or JSON file

    Returns:
        Parsed OpenAPI specification as dictionary
    """
    logger.info(f"Loading OpenAPI spec from {spec_path}")

    if not spec_path.exists():
        logger.error(f"OpenAPI spec file not found: {spec_path}")
        raise FileNotFoundError(f"OpenAPI spec file not found at {spec_path}")

    try:
        with open(spec_path, "r") as f:
            spec = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse OpenAPI file: {e}")
        raise SpecLoadError(f"Failed to parse OpenAPI file {spec_path}: {e}") from e

    if not isinstance(spec, dict) or not isinstance(spec.get("paths"), dict):
        logger.error(f"OpenAPI spec at {spec_path} has no paths mapping")
        raise SpecLoadError(f"OpenAPI spec at {spec_path} has no paths mapping")

    # Log some basic info about the spec
    logger.debug(f"OpenAPI version: {spec.get('openapi', 'unknown')}")
    info = spec.get("info", {})
    logger.debug(f"API title: {info.get('title', 'unknown')}")
    logger.debug(f"Found {len(spec['paths'])} paths in spec")

    return spec


def validate_openapi_spec(spec: Dict[str, Any]) -> bool:
    """Check that a parsed document looks like an OpenAPI 3 spec with paths.

    Args:
        spec: Parsed OpenAPI specification

    Returns:
        True if valid, False otherwise
    """
    if "openapi" not in spec:
        logger.warning("Not a valid OpenAPI spec (missing 'openapi' field)")
        return False

    if not str(spec["openapi"]).startswith("3."):
        logger.warning(f"Unsupported OpenAPI version: {spec['openapi']}")
        return False

    if not isinstance(spec.get("paths"), dict) or not spec["paths"]:
        logger.warning("OpenAPI spec defines no paths")
        return False

    return True


def extract_api_endpoints(spec: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Extract API endpoints from the OpenAPI spec.

    Args:
        spec: Parsed OpenAPI specification

    Returns:
        Dictionary of endpoints with their details, keyed by "METHOD path"
    """
    endpoints = {}
    paths = spec.get("paths", {})

    for path, methods in paths.items():
        for method, details in methods.items():
            # Path-level keys like "parameters" are not operations
            if method.lower() not in HTTP_METHODS:
                continue
            endpoint_id = f"{method.upper()} {path}"
            endpoints[endpoint_id] = {
                "path": path,
                "method": method.lower(),
                "summary": details.get("summary", ""),
                "description": details.get("description", ""),
                "parameters": details.get("parameters", []),
            }

    logger.debug(f"Extracted {len(endpoints)} endpoints from OpenAPI spec")
    return endpoints


class FileSpecSource:
    """Serves the full, unfiltered OpenAPI document from a file on disk.

    The file is read on every call, so edits to the document are picked up
    without restarting and callers always receive their own copy.
    """

    def __init__(self, spec_path: Path):
        self.spec_path = Path(spec_path)

    def get_full_specification(self) -> Dict[str, Any]:
        """Return a freshly loaded copy of the full specification."""
        return copy.deepcopy(load_openapi_spec(self.spec_path))
