"""Canonical Pydantic models shared across all opnorm modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory
or the project-local ``opnorm.json``:
    :class:`NormalizerConfig`.

**Engine input models** -- produced by the upstream API-description parser:
    :class:`Parameter`, :class:`Operation`, :class:`ImportRecord`,
    :class:`OperationGroup`, :class:`SchemaModel`, and :class:`InputDocument`.

**Engine output models** -- consumed by the downstream template renderer:
    :class:`DecoratedOperation`, :class:`GenericBaseResult`,
    :class:`ModelImport`, :class:`ModelImports`, :class:`NormalizedGroup`, and
    :class:`NormalizedDocument`.

Engine models are frozen.  Every normalisation stage builds new records with
``model_copy(update=...)`` instead of editing its input, so the operation list
handed to the detector is never aliased by the rewritten list.

Field names are snake_case in Python and camelCase on the wire; both spellings
are accepted on input and ``model_dump(by_alias=True)`` emits camelCase for
the renderer.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel

_ENGINE_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
)


# --- Configuration ---


class NormalizerConfig(BaseModel):
    """Settings controlling naming policy and generic-base conventions.

    Loaded and merged by :func:`~opnorm.config.resolve_config`.  The defaults
    reproduce the conventions of the ``/Api/<entity>/Add`` style back end the
    canonical catalog was written for.
    """

    model_config = ConfigDict(protected_namespaces=())

    kebab_file_naming: bool = Field(
        default=True, description="Derive model and api file names with dashize()"
    )
    model_package: str = Field(default="model", description="Model import package")
    api_package: str = Field(default="api", description="Api import package")
    api_path_prefix: str = Field(
        default="/Api", description="Prefix stripped from the creation path"
    )
    creation_path_suffix: str = Field(
        default="/Add", description="Suffix stripped from the creation path"
    )
    envelope_types: list[str] = Field(
        default_factory=lambda: ["Datahistory", "GridApiResponse"],
        description="Types only the canonical operations return; pruned after promotion",
    )
    catalog_file: Optional[str] = Field(
        default=None, description="JSON/YAML file overriding the default catalog"
    )
    output_format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


# --- Engine input ---


class Parameter(BaseModel):
    """A single operation parameter as emitted by the upstream parser.

    Compared by value only; see :func:`~opnorm.normalizer.params.params_equal`.
    A parameter without a ``base_name`` is ignored by the comparator.
    """

    model_config = _ENGINE_CONFIG

    base_name: Optional[str] = None
    param_name: Optional[str] = None
    data_type: Optional[str] = None
    data_format: Optional[str] = None
    required: bool = False
    description: Optional[str] = None


class Operation(BaseModel):
    """One HTTP endpoint's generator-facing metadata.

    ``path`` holds the raw template (``/Api/widgets/{id}``) until the path
    rewriter replaces it.  ``has_body_param`` may be omitted, in which case
    body presence is derived from ``body_params``.
    """

    model_config = _ENGINE_CONFIG

    operation_id: str = ""
    http_method: str
    path: str
    summary: Optional[str] = None
    notes: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    path_params: list[Parameter] = Field(default_factory=list)
    query_params: list[Parameter] = Field(default_factory=list)
    header_params: list[Parameter] = Field(default_factory=list)
    body_params: list[Parameter] = Field(default_factory=list)
    has_body_param: Optional[bool] = None
    return_type: Optional[str] = None
    return_base_type: Optional[str] = None
    return_container: Optional[str] = None
    imports: list[str] = Field(default_factory=list)

    @property
    def has_body(self) -> bool:
        """Whether the operation sends a request body."""
        if self.has_body_param is not None:
            return self.has_body_param
        return bool(self.body_params)


class ImportRecord(BaseModel):
    """A model import used by an operation group.

    Upstream provides only ``import`` (e.g. ``model/grid-api-response``);
    :func:`~opnorm.normalizer.imports.resolve_operation_imports` fills in
    ``filename`` and ``classname``.
    """

    model_config = _ENGINE_CONFIG

    import_: str = Field(alias="import")
    filename: Optional[str] = None
    classname: Optional[str] = None


class OperationGroup(BaseModel):
    """All operations belonging to one tag, emitted as a single service class."""

    model_config = _ENGINE_CONFIG

    classname: str = "DefaultService"
    operations: list[Operation] = Field(default_factory=list)
    imports: list[ImportRecord] = Field(default_factory=list)


class SchemaModel(BaseModel):
    """A generated model class and the type names it references."""

    model_config = _ENGINE_CONFIG

    classname: str
    name: Optional[str] = None
    imports: list[str] = Field(default_factory=list)
    is_alias: bool = False


class InputDocument(BaseModel):
    """Top-level document accepted by ``opnorm normalize``."""

    model_config = _ENGINE_CONFIG

    groups: list[OperationGroup] = Field(default_factory=list)
    models: list[SchemaModel] = Field(default_factory=list)


# --- Canonical signatures ---


class CanonicalSignature(BaseModel):
    """Expected shape of one conventional CRUD endpoint.

    ``name`` is stored already normalised with the same operation-id function
    the upstream generator used, so it compares directly against
    :attr:`Operation.operation_id`.
    """

    model_config = _ENGINE_CONFIG

    name: str
    http_method: str
    has_body: bool = False
    path_params: tuple[Parameter, ...] = ()
    query_params: tuple[Parameter, ...] = ()


class SignatureCatalog(BaseModel):
    """An ordered, immutable set of canonical signatures.

    ``creation`` names the signature whose matched operation supplies the
    entity type and entity name of a promoted group.
    """

    model_config = _ENGINE_CONFIG

    signatures: tuple[CanonicalSignature, ...]
    creation: str

    @model_validator(mode="after")
    def _check_creation(self) -> "SignatureCatalog":
        names = [signature.name for signature in self.signatures]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate signature names in catalog: {names}")
        if self.creation not in names:
            raise ValueError(f"creation signature {self.creation!r} is not in the catalog")
        return self

    @property
    def creation_signature(self) -> CanonicalSignature:
        for signature in self.signatures:
            if signature.name == self.creation:
                return signature
        raise KeyError(self.creation)


# --- Engine output ---


class DecoratedOperation(Operation):
    """An :class:`Operation` in the uniform shape handed to the renderer.

    ``http_method`` is lower case and ``path`` is the interpolation template
    produced by :func:`~opnorm.normalizer.path_template.rewrite_path`.
    """

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_get(self) -> bool:
        return self.http_method.lower() == "get"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_post(self) -> bool:
        return self.http_method.lower() == "post"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_put(self) -> bool:
        return self.http_method.lower() == "put"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_delete(self) -> bool:
        return self.http_method.lower() == "delete"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_post_or_put(self) -> bool:
        return self.is_post or self.is_put

    @computed_field  # type: ignore[prop-decorator]
    @property
    def path_no_api(self) -> str:
        """The path without its leading ``/Api`` segment."""
        if self.path.startswith("/Api"):
            return self.path[len("/Api"):]
        return self.path


class GenericBaseResult(BaseModel):
    """Outcome of a successful promotion to a generic base."""

    model_config = _ENGINE_CONFIG

    entity_type_name: str
    entity_name: str
    removed_operations: tuple[Operation, ...] = ()
    remaining_operations: tuple[Operation, ...] = ()


class ModelImport(BaseModel):
    """One cross-reference from a model to another model file."""

    model_config = _ENGINE_CONFIG

    classname: str
    filename: str


class ModelImports(BaseModel):
    """A model together with the imports its rendered file needs."""

    model_config = _ENGINE_CONFIG

    model: SchemaModel
    imports: list[ModelImport] = Field(default_factory=list)


class NormalizedGroup(BaseModel):
    """Terminal record for one operation group, ready for rendering."""

    model_config = _ENGINE_CONFIG

    classname: str
    api_filename: str
    operations: list[DecoratedOperation] = Field(default_factory=list)
    imports: list[ImportRecord] = Field(default_factory=list)
    generic_base: Optional[GenericBaseResult] = Field(default=None, exclude=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_generic_base(self) -> bool:
        return self.generic_base is not None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def generic_type_name(self) -> Optional[str]:
        return self.generic_base.entity_type_name if self.generic_base else None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def generic_entity_name(self) -> Optional[str]:
        return self.generic_base.entity_name if self.generic_base else None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_extra_methods(self) -> bool:
        return bool(self.operations)


class NormalizedDocument(BaseModel):
    """Everything ``opnorm normalize`` emits for one input document."""

    model_config = _ENGINE_CONFIG

    groups: list[NormalizedGroup] = Field(default_factory=list)
    models: list[ModelImports] = Field(default_factory=list)
