"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

import json
from pathlib import Path
from unittest.mock import mock_open, patch

import pytest

from dsdocs.core.config import DEFAULT_SPEC_PATH
from dsdocs.openapi_parser import (
    FileSpecSource,
    SpecLoadError,
    extract_api_endpoints,
    load_openapi_spec,
    validate_openapi_spec,
)


@pytest.mark.unit
class TestOpenAPIParser:
    def test_load_openapi_spec_missing_file(self):
        """Test loading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_openapi_spec(Path("nonexistent.yml"))

    def test_load_openapi_spec_valid_file(self):
        """Test loading a valid OpenAPI spec file."""
        mock_yaml = """
        openapi: 3.0.2
        info:
          title: Metastore API
          version: 1.0.0
        paths:
          /api/1/datastore/sql:
            get:
              summary: Query
        """

        m = mock_open(read_data=mock_yaml)
        with patch("builtins.open", m), patch("dsdocs.openapi_parser.Path.exists", return_value=True):
            result = load_openapi_spec(Path("metastore-openapi.yml"))

        assert result["openapi"] == "3.0.2"
        assert result["info"]["title"] == "Metastore API"
        assert "/api/1/datastore/sql" in result["paths"]

    def test_load_json_spec(self, temp_dir, full_spec):
        spec_file = temp_dir / "spec.json"
        spec_file.write_text(json.dumps(full_spec))

        assert load_openapi_spec(spec_file) == full_spec

    def test_load_invalid_yaml(self, temp_dir):
        spec_file = temp_dir / "broken.yml"
        spec_file.write_text("paths: [unclosed\n")

        with pytest.raises(SpecLoadError):
            load_openapi_spec(spec_file)

    def test_load_document_without_paths(self, temp_dir):
        spec_file = temp_dir / "nopaths.yml"
        spec_file.write_text("openapi: 3.0.2\ninfo: {title: x}\n")

        with pytest.raises(SpecLoadError, match="no paths"):
            load_openapi_spec(spec_file)

    def test_bundled_spec_loads(self):
        spec = load_openapi_spec(DEFAULT_SPEC_PATH)

        assert validate_openapi_spec(spec) is True
        assert "query" in spec["components"]["parameters"]

    def test_validate_openapi_spec(self, full_spec):
        assert validate_openapi_spec(full_spec) is True

    def test_validate_openapi_spec_invalid(self):
        assert validate_openapi_spec({"swagger": "2.0", "paths": {"/x": {}}}) is False
        assert validate_openapi_spec({"openapi": "2.0", "paths": {"/x": {}}}) is False
        assert validate_openapi_spec({"openapi": "3.0.0", "paths": {}}) is False

    def test_extract_api_endpoints(self, full_spec):
        """Test extracting API endpoints from an OpenAPI spec."""
        full_spec["paths"]["/api/1/datastore/sql"]["parameters"] = [{"name": "ignored"}]

        endpoints = extract_api_endpoints(full_spec)

        assert "GET /api/1/datastore/sql" in endpoints
        assert "PUT /api/1/metastore/schemas/dataset/items/{identifier}" in endpoints
        assert "POST /api/1/datastore/imports" in endpoints
        # Path-level parameters are not an operation
        assert not any(key.startswith("PARAMETERS") for key in endpoints)
        assert len(endpoints) == 7
        assert endpoints["GET /api/1/datastore/sql"]["summary"] == "Query resources in the datastore"


@pytest.mark.unit
class TestFileSpecSource:
    def test_returns_fresh_copies(self, temp_dir, full_spec):
        spec_file = temp_dir / "spec.json"
        spec_file.write_text(json.dumps(full_spec))
        source = FileSpecSource(spec_file)

        first = source.get_full_specification()
        first["paths"].clear()
        second = source.get_full_specification()

        assert second["paths"] == full_spec["paths"]

    def test_reads_file_on_every_call(self, temp_dir, full_spec):
        spec_file = temp_dir / "spec.json"
        spec_file.write_text(json.dumps(full_spec))
        source = FileSpecSource(spec_file)
        source.get_full_specification()

        full_spec["paths"] = {"/api/1/datastore/sql": {"get": {}}}
        spec_file.write_text(json.dumps(full_spec))

        assert list(source.get_full_specification()["paths"]) == ["/api/1/datastore/sql"]

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            FileSpecSource(temp_dir / "missing.yml").get_full_specification()
