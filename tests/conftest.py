"""Shared test fixtures for opnorm.

Provides a canonical "widgets" operation group that exactly matches the
default signature catalog, config isolation, and output-state reset.  These
fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from opnorm.models import ImportRecord, Operation, OperationGroup, Parameter, SignatureCatalog
from opnorm.normalizer import OperationNormalizer, default_catalog
from opnorm.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and the opnorm logger after every test.

    The OutputManager caches sys.stdout/sys.stderr at creation time; when
    Typer's CliRunner swaps those streams the cached references go stale.
    The root callback also detaches the ``opnorm`` logger from the root
    logger, which would hide records from ``caplog``.
    """
    yield
    reset_output()
    logger = logging.getLogger("opnorm")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG dirs at tmp_path, clear OPNORM_* variables, and chdir there."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("opnorm.config._is_xdg_platform", lambda: True)
    for var in ["OPNORM_KEBAB_FILE_NAMING", "OPNORM_MODEL_PACKAGE", "OPNORM_CATALOG"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Canonical widget operations
# ---------------------------------------------------------------------------


@pytest.fixture
def id_param() -> Parameter:
    return Parameter(base_name="id", data_type="number", data_format="int64", required=True)


@pytest.fixture
def history_query() -> list[Parameter]:
    return [
        Parameter(base_name="datumOd", data_type="string", data_format="date-time"),
        Parameter(base_name="DatumDo", data_type="string", data_format="date-time"),
        Parameter(base_name="maxPocet", data_type="number", data_format="int32"),
    ]


@pytest.fixture
def canonical_operations(id_param: Parameter, history_query: list[Parameter]) -> list[Operation]:
    """Six operations matching Add/Item/Delete/Save/List/History for ``Widget``."""
    body = Parameter(base_name="body", data_type="Widget", required=True)
    return [
        Operation(
            operation_id="add", http_method="GET", path="/Api/widgets/Add",
            return_type="Widget", return_base_type="Widget", imports=["Widget"],
        ),
        Operation(
            operation_id="item", http_method="GET", path="/Api/widgets/{id}",
            path_params=[id_param], return_type="Widget", return_base_type="Widget",
        ),
        Operation(
            operation_id="callDelete", http_method="DELETE", path="/Api/widgets/{id}",
            path_params=[id_param],
        ),
        Operation(
            operation_id="save", http_method="PUT", path="/Api/widgets/Save",
            body_params=[body], return_type="Widget", return_base_type="Widget",
        ),
        Operation(
            operation_id="list", http_method="GET", path="/Api/widgets/List",
            return_type="GridApiResponse", return_base_type="GridApiResponse",
            imports=["GridApiResponse"],
        ),
        Operation(
            operation_id="history", http_method="GET", path="/Api/widgets/{id}/History",
            path_params=[id_param], query_params=list(reversed(history_query)),
            return_type="Array<Datahistory>", return_base_type="Datahistory",
            return_container="array", imports=["Datahistory"],
        ),
    ]


@pytest.fixture
def archive_operation(id_param: Parameter) -> Operation:
    """A non-canonical operation that survives promotion."""
    return Operation(
        operation_id="archive", http_method="POST", path="/Api/widgets/{id}/Archive",
        path_params=[id_param], return_type="Widget", return_base_type="Widget",
    )


@pytest.fixture
def widget_imports() -> list[ImportRecord]:
    return [
        ImportRecord.model_validate({"import": "model/widget"}),
        ImportRecord.model_validate({"import": "model/grid-api-response"}),
        ImportRecord.model_validate({"import": "model/datahistory"}),
    ]


@pytest.fixture
def widget_group(
    canonical_operations: list[Operation],
    widget_imports: list[ImportRecord],
) -> OperationGroup:
    return OperationGroup(
        classname="WidgetService",
        operations=canonical_operations,
        imports=widget_imports,
    )


@pytest.fixture
def catalog() -> SignatureCatalog:
    return default_catalog()


@pytest.fixture
def normalizer(catalog: SignatureCatalog) -> OperationNormalizer:
    return OperationNormalizer(catalog=catalog)
