"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

import copy
import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from dsdocs.core.logging import log_operation
from dsdocs.data_modifiers import DataModifierManager
from dsdocs.dataset_endpoints import modify_dataset_endpoints
from dsdocs.endpoint_filter import DEFAULT_ENDPOINTS_TO_KEEP, keep_dataset_specific_endpoints
from dsdocs.models import Distribution
from dsdocs.sql_endpoints import modify_sql_endpoints

logger = logging.getLogger("dsdocs.api_docs")


class SpecSource(Protocol):
    def get_full_specification(self) -> Dict[str, Any]:
        ...


class DatasetMetadataSource(Protocol):
    def get_distributions(self, identifier: str) -> List[Distribution]:
        ...


class DatasetApiDocs:
    """Provides dataset-specific OpenAPI documentation.

    Takes the full metastore/datastore OpenAPI document and narrows it to the
    endpoints that make sense for a single dataset: the dataset lookup itself
    and one SQL query example per distribution.
    """

    def __init__(
        self,
        spec_source: SpecSource,
        metastore: DatasetMetadataSource,
        modifiers: Optional[DataModifierManager] = None,
        endpoints_to_keep: Mapping[str, Sequence[str]] = DEFAULT_ENDPOINTS_TO_KEEP,
    ):
        """
        Args:
            spec_source: Serves the full OpenAPI document
            metastore: Looks up a dataset's distributions
            modifiers: Data modifier plugins; none registered if omitted
            endpoints_to_keep: Path patterns and the methods kept for each
        """
        self.spec_source = spec_source
        self.metastore = metastore
        self.modifiers = modifiers if modifiers is not None else DataModifierManager()
        self.endpoints_to_keep = endpoints_to_keep

    def get_dataset_specific(self, identifier: str) -> Dict[str, Any]:
        """Return the OpenAPI document restricted to one dataset.

        Args:
            identifier: Dataset uuid

        Returns:
            The dataset-specific OpenAPI document
        """
        with log_operation(logger, "dataset docs", context={"dataset": identifier}) as context:
            spec = copy.deepcopy(self.spec_source.get_full_specification())

            components = spec.setdefault("components", {})
            # Remove the security schemes.
            components.pop("securitySchemes", None)
            # Tags can be added later when needed, remove them for now.
            spec["tags"] = []

            paths = spec.get("paths", {})
            paths = keep_dataset_specific_endpoints(paths, self.endpoints_to_keep)
            paths = modify_dataset_endpoints(paths, identifier)
            paths = modify_sql_endpoints(
                paths,
                identifier,
                components.get("parameters", {}),
                self.modifiers,
                self.metastore.get_distributions,
            )

            spec["paths"] = paths
            context["paths"] = len(paths)
            return spec

