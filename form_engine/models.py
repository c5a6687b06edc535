"""Data models for form schemas.

These Pydantic models mirror the JSON interchange format produced by the
schema editor. Keys are camelCase on the wire (aliases) and snake_case in
Python. Every model keeps unknown extra keys so newer schemas still load.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, Field(strict=True, min_length=1)]
NonNegativeInt = Annotated[int, Field(strict=True, ge=0)]
Number = Union[StrictInt, StrictFloat]
Scalar = Union[StrictStr, StrictBool]


class FieldType(str, Enum):
    """Input kinds understood by the engine.

    UNKNOWN stands in for any type string outside this set; the raw string
    stays available on `FormField.type`.
    """

    TEXT = "text"
    TEXTAREA = "textarea"
    DROPDOWN = "dropdown"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    NUMBER = "number"
    UNKNOWN = "unknown"


OPTION_FIELD_TYPES = (FieldType.DROPDOWN, FieldType.RADIO)


class ConditionOperator(str, Enum):
    """Operators for visibility conditions."""

    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    CONTAINS = "contains"
    IS_EMPTY = "isEmpty"
    IS_NOT_EMPTY = "isNotEmpty"


class SchemaModel(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class VisibilityCondition(SchemaModel):
    """Shows the owning field or group only while the condition holds.

    Attributes:
        depends_on: Dot-path of the watched field (e.g. 'account.type').
        operator: Comparison to apply.
        value: Comparison target; ignored by isEmpty/isNotEmpty.
    """

    depends_on: NonEmptyStr = Field(..., description="Dot-path of the watched field.")
    operator: ConditionOperator
    value: Optional[Scalar] = None


class ValidationRule(SchemaModel):
    """One block of constraints sharing a single failure message."""

    pattern: Optional[StrictStr] = None
    min_length: Optional[NonNegativeInt] = None
    max_length: Optional[NonNegativeInt] = None
    min: Optional[Number] = None
    max: Optional[Number] = None
    required: Optional[StrictBool] = None
    message: NonEmptyStr


class WhenCondition(SchemaModel):
    field: NonEmptyStr
    equals: NonEmptyStr


class DynamicValidation(SchemaModel):
    """A rule block, optionally guarded by another field's value."""

    when: Optional[WhenCondition] = None
    rules: ValidationRule


class ApiIntegration(SchemaModel):
    """Binds an external endpoint to the fields it reads and fills.

    Attributes:
        id: Referenced by `FormField.auto_fill_from`.
        endpoint: Name of the external capability (e.g. 'fetchAddressFromZip').
        trigger_fields: Dot-paths read to build the call inputs.
        target_fields: Dot-paths written from the call result.
    """

    id: NonEmptyStr
    endpoint: NonEmptyStr
    trigger_fields: List[NonEmptyStr] = Field(default_factory=list)
    target_fields: List[NonEmptyStr] = Field(default_factory=list)


class SelectOption(SchemaModel):
    label: NonEmptyStr
    value: NonEmptyStr


class FormField(SchemaModel):
    """A leaf input. `id` is the dot-path where its value lives."""

    id: NonEmptyStr
    type: NonEmptyStr
    label: NonEmptyStr
    placeholder: Optional[StrictStr] = None
    default_value: Optional[Scalar] = None
    options: Optional[List[SelectOption]] = Field(default=None, validate_default=True)
    validation: Optional[List[DynamicValidation]] = None
    visibility: Optional[VisibilityCondition] = None
    auto_fill_from: Optional[StrictStr] = None
    disabled: Optional[StrictBool] = None

    @field_validator("options")
    @classmethod
    def _options_required_for_choices(
        cls, options: Optional[List[SelectOption]], info: ValidationInfo
    ) -> Optional[List[SelectOption]]:
        field_type = info.data.get("type")
        if field_type in {t.value for t in OPTION_FIELD_TYPES} and not options:
            raise ValueError(
                f'"options" is required and must be non-empty for type "{field_type}"'
            )
        return options

    @property
    def kind(self) -> FieldType:
        """The closed field type; unrecognised strings map to UNKNOWN."""
        try:
            return FieldType(self.type)
        except ValueError:
            return FieldType.UNKNOWN


class FormGroup(SchemaModel):
    """A container of fields and nested groups, optionally conditional."""

    id: NonEmptyStr
    title: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    visibility: Optional[VisibilityCondition] = None
    fields: Optional[List[FormField]] = None
    groups: Optional[List["FormGroup"]] = None


FormGroup.model_rebuild()


class FormSchema(SchemaModel):
    """Root schema document."""

    id: NonEmptyStr
    title: NonEmptyStr
    description: Optional[StrictStr] = None
    groups: List[FormGroup]
    api_integrations: Optional[List[ApiIntegration]] = None

    def to_json_dict(self) -> Dict[str, Any]:
        """Dump back to the camelCase interchange shape."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")
