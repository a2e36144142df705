"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

"""
HTTP surface serving dataset-specific OpenAPI documents.

Endpoints:
- GET /api/1/metastore/schemas/dataset/items/{identifier}/docs - Dataset-specific spec
"""

import logging

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status

from dsdocs import __version__
from dsdocs.api_docs import DatasetApiDocs
from dsdocs.core.config import AppConfig, get_app_config
from dsdocs.core.logging import correlation_id
from dsdocs.core.services import build_dataset_api_docs
from dsdocs.metastore_client import DatasetNotFoundError, MetastoreError
from dsdocs.openapi_parser import SpecLoadError

logger = logging.getLogger("dsdocs.api.app")


def get_docs_service(request: Request) -> DatasetApiDocs:
    return request.app.state.docs_service


def create_app(config: AppConfig | None = None, docs_service: DatasetApiDocs | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: Application configuration, read from the environment if omitted
        docs_service: Pre-built docs service, built from config if omitted
    """
    config = config or get_app_config()
    app = FastAPI(title=f"{config.app_name} dataset API docs", version=__version__)
    app.state.docs_service = docs_service or build_dataset_api_docs(config)

    @app.get("/api/1/metastore/schemas/dataset/items/{identifier}/docs")
    def dataset_docs(
        identifier: str,
        request: Request,
        response: Response,
        service: DatasetApiDocs = Depends(get_docs_service),
    ):
        """Return OpenAPI docs restricted to one dataset."""
        with correlation_id(request.headers.get("X-Correlation-ID")) as cid:
            response.headers["X-Correlation-ID"] = cid
            return _build_docs(service, identifier)

    return app


def _build_docs(service: DatasetApiDocs, identifier: str) -> dict:
    try:
        return service.get_dataset_specific(identifier)
    except DatasetNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except MetastoreError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except (FileNotFoundError, SpecLoadError) as e:
        logger.error(f"Full OpenAPI document unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="API specification unavailable",
        )
