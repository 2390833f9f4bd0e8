"""Pydantic models for the plain records exchanged with the API layer."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class QuantityRecord(_Record):
    """``{amount, unit}`` payload."""

    amount: float
    unit: str


class ServingSizeRecord(_Record):
    """Serving size payload.

    ``type`` and ``value`` are legacy spellings of ``kind`` and ``amount``.
    """

    kind: StrictStr | None = None
    type: StrictStr | None = None
    amount: StrictInt | StrictFloat | QuantityRecord | None = None
    value: StrictInt | StrictFloat | QuantityRecord | None = None
    name: StrictStr | None = None


class CustomSizeRecord(_Record):
    """Custom size payload."""

    id: str | None = None
    name: str | None = None
    singular_name: str | None = None
    plural_name: str | None = None
    notes: list[str] = Field(default_factory=list)
    serving_size: Any = None
    servings: float | None = None


class PreparationRecord(_Record):
    """Preparation payload."""

    id: str | None = None
    name: str | None = None
    nutritional_information: dict[str, Any] | None = None
    mass: QuantityRecord | None = None
    volume: QuantityRecord | None = None
    custom_sizes: list[CustomSizeRecord] = Field(default_factory=list)
    serving_size_description: str | None = None
    notes: list[str] = Field(default_factory=list)


class ProductRecord(_Record):
    """Product payload with its preparations."""

    id: str | None = None
    name: str | None = None
    brand: str | None = None
    preparations: list[PreparationRecord] = Field(default_factory=list)


class BarcodeRecord(_Record):
    """Barcode attached to a group."""

    code: str
    notes: list[Any] = Field(default_factory=list)
    serving_size: Any = None


class GroupItemRecord(_Record):
    """Group item payload: a product or a nested group plus its contribution."""

    serving_size: Any = None
    preparation_id: str | None = Field(default=None, alias="preparationID")
    product: ProductRecord | None = None
    group: "GroupRecord | None" = None


class GroupRecord(_Record):
    """Product group payload."""

    id: str | None = None
    name: str | None = None
    items: list[GroupItemRecord] = Field(default_factory=list)
    mass: QuantityRecord | None = None
    volume: QuantityRecord | None = None
    custom_sizes: list[CustomSizeRecord] = Field(default_factory=list)
    barcodes: list[BarcodeRecord] = Field(default_factory=list)


class LogItemRecord(_Record):
    """What a log entry refers to."""

    product_id: str | None = Field(default=None, alias="productID")
    group_id: str | None = Field(default=None, alias="groupID")
    preparation_id: str | None = Field(default=None, alias="preparationID")
    serving_size: Any = None


class LogEntryRecord(_Record):
    """Food log entry payload."""

    id: str
    timestamp: float | None = None
    item: LogItemRecord


GroupItemRecord.model_rebuild()
