"""Canonical CRUD signatures and the matcher that checks operations against them.

A :class:`~opnorm.models.CanonicalSignature` describes one conventional
endpoint of the generic back end (``Add``, ``Item``, ``Delete``, ``Save``,
``List``, ``History``).  Catalogs are immutable values built explicitly by
:func:`default_catalog` or :func:`load_catalog` and passed to the detector at
call time; nothing here is module-level mutable state.

Catalog files are JSON or YAML documents of the form::

    {
      "creation": "Add",
      "signatures": [
        {"name": "Add", "httpMethod": "GET"},
        {"name": "Item", "httpMethod": "GET",
         "pathParams": [{"baseName": "id", "dataType": "number",
                         "dataFormat": "int64", "required": true}]}
      ]
    }

Signature names in a file are raw names; they are normalised with
:func:`~opnorm.naming.to_operation_id` on load.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from pydantic import ValidationError

from opnorm.exceptions import CatalogError, InputParseError
from opnorm.models import CanonicalSignature, Operation, Parameter, SignatureCatalog
from opnorm.naming import to_operation_id
from opnorm.normalizer.params import params_equal

logger = logging.getLogger(__name__)

CREATION_SIGNATURE = "Add"


def matches(signature: CanonicalSignature, operation: Operation) -> bool:
    """Return ``True`` if *operation* has exactly the shape of *signature*.

    Operation id, HTTP method (case-sensitive, as stored), body presence,
    query parameters and path parameters must all agree.  There is no partial
    credit.
    """
    return (
        signature.name == operation.operation_id
        and signature.http_method == operation.http_method
        and signature.has_body == operation.has_body
        and params_equal(signature.query_params, operation.query_params)
        and params_equal(signature.path_params, operation.path_params)
    )


def default_catalog(
    normalize_id: Callable[[str], str] = to_operation_id,
) -> SignatureCatalog:
    """Build the Add/Item/Delete/Save/List/History catalog.

    Args:
        normalize_id: The operation-id normaliser the upstream generator
            used.  Signature names go through it so they compare equal to
            upstream operation ids.
    """
    required_id = Parameter(
        base_name="id", data_type="number", data_format="int64", required=True
    )
    history_query = (
        Parameter(base_name="datumOd", data_type="string", data_format="date-time"),
        Parameter(base_name="DatumDo", data_type="string", data_format="date-time"),
        Parameter(base_name="maxPocet", data_type="number", data_format="int32"),
    )

    signatures = (
        CanonicalSignature(name=normalize_id("Add"), http_method="GET"),
        CanonicalSignature(
            name=normalize_id("Item"), http_method="GET", path_params=(required_id,)
        ),
        CanonicalSignature(
            name=normalize_id("Delete"), http_method="DELETE", path_params=(required_id,)
        ),
        CanonicalSignature(name=normalize_id("Save"), http_method="PUT", has_body=True),
        CanonicalSignature(name=normalize_id("List"), http_method="GET"),
        CanonicalSignature(
            name=normalize_id("History"),
            http_method="GET",
            path_params=(required_id,),
            query_params=history_query,
        ),
    )
    return SignatureCatalog(signatures=signatures, creation=normalize_id(CREATION_SIGNATURE))


def catalog_from_dict(
    data: dict[str, Any],
    normalize_id: Callable[[str], str] = to_operation_id,
) -> SignatureCatalog:
    """Validate a catalog document and normalise its signature names.

    Raises:
        CatalogError: If the document is not a valid catalog.
    """
    raw_signatures = data.get("signatures")
    if not isinstance(raw_signatures, list) or not raw_signatures:
        raise CatalogError("Catalog must contain a non-empty 'signatures' list")

    try:
        signatures = []
        for raw in raw_signatures:
            if not isinstance(raw, dict) or not raw.get("name"):
                raise CatalogError(f"Catalog signature without a name: {raw!r}")
            signature = CanonicalSignature.model_validate(raw)
            signatures.append(
                signature.model_copy(update={"name": normalize_id(signature.name)})
            )
        creation = normalize_id(str(data.get("creation", CREATION_SIGNATURE)))
        return SignatureCatalog(signatures=tuple(signatures), creation=creation)
    except ValidationError as exc:
        raise CatalogError(f"Invalid signature catalog: {exc}") from exc


def load_catalog(
    source: str,
    normalize_id: Callable[[str], str] = to_operation_id,
) -> SignatureCatalog:
    """Load a catalog from a JSON/YAML file, URL, or ``-`` for stdin.

    Raises:
        CatalogError: If the source cannot be read or is not a valid catalog.
    """
    from opnorm.loader import load_document

    try:
        data = load_document(source)
    except InputParseError as exc:
        raise CatalogError(f"Cannot load catalog from {source}: {exc}") from exc
    catalog = catalog_from_dict(data, normalize_id)
    logger.debug("Loaded %d canonical signatures from %s", len(catalog.signatures), source)
    return catalog
