"""Tests for opnorm.normalizer.signatures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from opnorm.exceptions import CatalogError
from opnorm.models import CanonicalSignature, Operation, Parameter, SignatureCatalog
from opnorm.normalizer.signatures import (
    catalog_from_dict,
    default_catalog,
    load_catalog,
    matches,
)


# ------------------------------------------------------------------ #
# default_catalog
# ------------------------------------------------------------------ #


class TestDefaultCatalog:
    def test_six_signatures(self, catalog: SignatureCatalog) -> None:
        assert [s.name for s in catalog.signatures] == [
            "add", "item", "callDelete", "save", "list", "history",
        ]

    def test_creation_is_add(self, catalog: SignatureCatalog) -> None:
        assert catalog.creation == "add"
        assert catalog.creation_signature.http_method == "GET"

    def test_save_requires_body(self, catalog: SignatureCatalog) -> None:
        save = next(s for s in catalog.signatures if s.name == "save")
        assert save.has_body is True
        assert save.http_method == "PUT"

    def test_history_query_params(self, catalog: SignatureCatalog) -> None:
        history = next(s for s in catalog.signatures if s.name == "history")
        assert {p.base_name for p in history.query_params} == {"datumOd", "DatumDo", "maxPocet"}
        assert all(not p.required for p in history.query_params)

    def test_custom_normalizer(self) -> None:
        catalog = default_catalog(normalize_id=str.upper)
        assert catalog.creation == "ADD"
        assert "DELETE" in [s.name for s in catalog.signatures]

    def test_catalog_is_immutable(self, catalog: SignatureCatalog) -> None:
        with pytest.raises(ValidationError):
            catalog.creation = "item"  # type: ignore[misc]


# ------------------------------------------------------------------ #
# matches
# ------------------------------------------------------------------ #


class TestMatches:
    @pytest.fixture
    def item_signature(self, id_param: Parameter) -> CanonicalSignature:
        return CanonicalSignature(name="item", http_method="GET", path_params=(id_param,))

    @pytest.fixture
    def item_operation(self, id_param: Parameter) -> Operation:
        return Operation(
            operation_id="item", http_method="GET", path="/Api/widgets/{id}",
            path_params=[id_param], return_type="Widget",
        )

    def test_exact_match(self, item_signature, item_operation) -> None:
        assert matches(item_signature, item_operation)

    def test_operation_id_mismatch(self, item_signature, item_operation) -> None:
        op = item_operation.model_copy(update={"operation_id": "getItem"})
        assert not matches(item_signature, op)

    def test_method_is_case_sensitive(self, item_signature, item_operation) -> None:
        op = item_operation.model_copy(update={"http_method": "get"})
        assert not matches(item_signature, op)

    def test_body_presence_mismatch(self, item_signature, item_operation) -> None:
        op = item_operation.model_copy(update={"has_body_param": True})
        assert not matches(item_signature, op)

    def test_extra_query_param(self, item_signature, item_operation) -> None:
        op = item_operation.model_copy(
            update={"query_params": [Parameter(base_name="q", data_type="string")]}
        )
        assert not matches(item_signature, op)

    def test_path_param_type_mismatch(self, item_signature, item_operation) -> None:
        op = item_operation.model_copy(
            update={"path_params": [Parameter(base_name="id", data_type="string", required=True)]}
        )
        assert not matches(item_signature, op)

    def test_every_canonical_operation_matches_its_signature(
        self, catalog: SignatureCatalog, canonical_operations: list[Operation]
    ) -> None:
        for signature, operation in zip(catalog.signatures, canonical_operations):
            assert matches(signature, operation), signature.name

    def test_add_does_not_match_list(
        self, catalog: SignatureCatalog, canonical_operations: list[Operation]
    ) -> None:
        add_signature = catalog.signatures[0]
        list_operation = canonical_operations[4]
        assert not matches(add_signature, list_operation)


# ------------------------------------------------------------------ #
# catalog files
# ------------------------------------------------------------------ #


class TestCatalogFromDict:
    def test_names_are_normalised(self) -> None:
        catalog = catalog_from_dict({
            "creation": "Create",
            "signatures": [
                {"name": "Create", "httpMethod": "POST", "hasBody": True},
                {"name": "Delete", "httpMethod": "DELETE",
                 "pathParams": [{"baseName": "id", "dataType": "string", "required": True}]},
            ],
        })
        assert [s.name for s in catalog.signatures] == ["create", "callDelete"]
        assert catalog.creation == "create"
        assert catalog.signatures[1].path_params[0].base_name == "id"

    def test_default_creation_name(self) -> None:
        catalog = catalog_from_dict({"signatures": [{"name": "Add", "http_method": "GET"}]})
        assert catalog.creation == "add"

    def test_missing_signatures(self) -> None:
        with pytest.raises(CatalogError, match="non-empty"):
            catalog_from_dict({"creation": "Add"})

    def test_unnamed_signature(self) -> None:
        with pytest.raises(CatalogError, match="without a name"):
            catalog_from_dict({"signatures": [{"httpMethod": "GET"}]})

    def test_creation_not_in_catalog(self) -> None:
        with pytest.raises(CatalogError, match="Invalid signature catalog"):
            catalog_from_dict({
                "creation": "Add",
                "signatures": [{"name": "List", "httpMethod": "GET"}],
            })

    def test_duplicate_names(self) -> None:
        with pytest.raises(CatalogError):
            catalog_from_dict({
                "signatures": [
                    {"name": "Add", "httpMethod": "GET"},
                    {"name": "add", "httpMethod": "GET"},
                ],
            })

    def test_missing_method(self) -> None:
        with pytest.raises(CatalogError):
            catalog_from_dict({"signatures": [{"name": "Add"}]})


class TestLoadCatalog:
    def test_load_json(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({
            "signatures": [{"name": "Add", "httpMethod": "GET"}],
        }), encoding="utf-8")
        catalog = load_catalog(str(path))
        assert catalog.creation == "add"

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "creation: Create\n"
            "signatures:\n"
            "  - name: Create\n"
            "    httpMethod: POST\n"
            "    hasBody: true\n",
            encoding="utf-8",
        )
        catalog = load_catalog(str(path))
        assert catalog.signatures[0].name == "create"
        assert catalog.signatures[0].has_body is True

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogError, match="Cannot load catalog"):
            load_catalog(str(tmp_path / "nope.json"))
