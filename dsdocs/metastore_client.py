"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

import logging
from typing import Any, Dict, List

import requests
from pydantic import ValidationError
from requests.exceptions import ConnectionError, HTTPError, RequestException, Timeout

from dsdocs.core.config import MetastoreConfig
from dsdocs.models import DatasetRecord, Distribution

# Configure module logger
logger = logging.getLogger("dsdocs.metastore_client")


class MetastoreError(Exception):
    """Raised when the metastore cannot be reached or returns an unusable answer."""


class DatasetNotFoundError(MetastoreError):
    """Raised when the metastore does not know the requested item."""

    def __init__(self, schema_id: str, identifier: str):
        self.schema_id = schema_id
        self.identifier = identifier
        super().__init__(f"No {schema_id} found with identifier {identifier}")


class MetastoreClient:
    """Client for the metastore items API.

    Items are always requested with ``show-reference-ids`` so that references
    such as distributions come back as full objects carrying their identifier.
    """

    ITEMS_PATH = "/api/1/metastore/schemas/{schema_id}/items/{identifier}"

    def __init__(self, config: MetastoreConfig, session: requests.Session | None = None):
        """Initialize the metastore client.

        Args:
            config: Metastore connection settings
            session: Optional pre-built requests session
        """
        self.config = config
        self.session = session or requests.Session()
        self.headers = {"Accept": "application/json"}
        if config.api_token:
            self.headers["Authorization"] = f"Bearer {config.api_token}"

    def get(self, schema_id: str, identifier: str) -> Dict[str, Any]:
        """Fetch one metastore item with references resolved.

        Args:
            schema_id: Metastore schema, e.g. "dataset"
            identifier: Item identifier

        Returns:
            The item as a dictionary

        Raises:
            DatasetNotFoundError: The metastore answered 404
            MetastoreError: Any other transport or decoding failure
        """
        url = self.config.base_url + self.ITEMS_PATH.format(
            schema_id=schema_id, identifier=identifier
        )
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(
                url,
                params={"show-reference-ids": ""},
                headers=self.headers,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
            if response.status_code == 404:
                raise DatasetNotFoundError(schema_id, identifier)
            response.raise_for_status()
            return response.json()
        except DatasetNotFoundError:
            logger.warning(f"Metastore has no {schema_id} {identifier}")
            raise
        except HTTPError as e:
            logger.error(f"Metastore returned an error for {schema_id} {identifier}: {e}")
            raise MetastoreError(f"Metastore request failed: {e}") from e
        except (ConnectionError, Timeout) as e:
            logger.error(f"Could not reach metastore at {self.config.base_url}: {e}")
            raise MetastoreError(f"Could not reach metastore: {e}") from e
        except RequestException as e:
            logger.error(f"Metastore request failed: {e}")
            raise MetastoreError(f"Metastore request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Metastore returned invalid JSON for {schema_id} {identifier}")
            raise MetastoreError(f"Metastore returned invalid JSON: {e}") from e

    def get_distributions(self, identifier: str) -> List[Distribution]:
        """Get a dataset's distributions, or an empty list if it has none.

        Lookup failures are raised, never reported as "no distributions".
        """
        data = self.get("dataset", identifier)
        try:
            record = DatasetRecord.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected metadata shape for dataset {identifier}: {e}")
            raise MetastoreError(f"Unexpected metadata for dataset {identifier}: {e}") from e
        logger.debug(f"Dataset {identifier} has {len(record.distribution)} distributions")
        return record.distribution
