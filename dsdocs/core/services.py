"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

import logging

from dsdocs.api_docs import DatasetApiDocs
from dsdocs.core.config import AppConfig, get_app_config
from dsdocs.data_modifiers import DataModifierManager
from dsdocs.metastore_client import MetastoreClient
from dsdocs.openapi_parser import FileSpecSource

logger = logging.getLogger("dsdocs.core.services")


def build_modifier_manager(config: AppConfig) -> DataModifierManager:
    """Create the data modifier manager, loading plugins if enabled."""
    manager = DataModifierManager()
    if config.docs.discover_modifiers:
        manager.discover()
    logger.debug(f"{len(manager)} data modifiers registered")
    return manager


def build_dataset_api_docs(config: AppConfig | None = None) -> DatasetApiDocs:
    """Wire the dataset docs service from configuration."""
    config = config or get_app_config()
    return DatasetApiDocs(
        spec_source=FileSpecSource(config.docs.spec_path),
        metastore=MetastoreClient(config.metastore),
        modifiers=build_modifier_manager(config),
        endpoints_to_keep=config.docs.endpoints_to_keep,
    )
