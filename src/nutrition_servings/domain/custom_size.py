"""Food-specific named serving sizes."""

from dataclasses import dataclass, field

from nutrition_servings.domain.records import CustomSizeRecord
from nutrition_servings.domain.serving_size import (
    Count,
    CustomSize,
    ServingSize,
    serving_size_or_default,
)
from nutrition_servings.domain.units import format_significant


@dataclass(frozen=True)
class CustomSizeDefinition:
    """A shorthand like "cookie" that stands for an underlying serving size."""

    name: str
    serving_size: ServingSize = field(default_factory=lambda: Count(1))
    id: str | None = None
    singular_name: str = ""
    plural_name: str = ""
    notes: list[str] = field(default_factory=list)

    @classmethod
    def of_servings(cls, name: str, servings: float) -> "CustomSizeDefinition":
        return cls(name=name, serving_size=Count(servings))

    @classmethod
    def from_model(cls, record: CustomSizeRecord) -> "CustomSizeDefinition":
        if record.serving_size is not None:
            serving_size = serving_size_or_default(record.serving_size)
        elif record.servings is not None:
            serving_size = Count(record.servings)
        else:
            serving_size = Count(1)
        return cls(
            id=record.id,
            name=record.name or "",
            singular_name=record.singular_name or "",
            plural_name=record.plural_name or "",
            notes=list(record.notes),
            serving_size=serving_size,
        )

    @property
    def description(self) -> str | None:
        """Label for what one of this size amounts to, e.g. ``"0.5 servings"``."""
        size = self.serving_size
        if isinstance(size, CustomSize):
            return None
        if isinstance(size, Count):
            suffix = "" if size.count == 1 else "s"
            return f"{format_significant(size.count)} serving{suffix}"
        return f"{format_significant(size.amount)}{size.unit}"

    def to_record(self) -> dict[str, object]:
        record: dict[str, object] = {
            "name": self.name,
            "singularName": self.singular_name,
            "pluralName": self.plural_name,
            "notes": list(self.notes),
            "servingSize": self.serving_size.to_record(),
        }
        if self.id is not None:
            record["id"] = self.id
        return record
