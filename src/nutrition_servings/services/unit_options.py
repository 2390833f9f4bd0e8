"""Unit choices offered when picking a serving size."""

from dataclasses import dataclass, field

from nutrition_servings.domain.group import Servable
from nutrition_servings.domain.serving_size import (
    Count,
    CustomSize,
    Energy,
    Mass,
    Volume,
)


@dataclass(frozen=True)
class UnitDefinition:
    """A unit as stored, how it is shown, and words that find it."""

    value: str
    label: str
    aliases: tuple[str, ...]


@dataclass(frozen=True)
class SelectOption:
    """One choice in the serving size picker."""

    kind: str
    value: str
    label: str
    aliases: tuple[str, ...]


@dataclass(frozen=True)
class OptionGroup:
    """A labelled section of picker choices."""

    label: str
    options: list[SelectOption] = field(default_factory=list)


MASS_UNITS: tuple[UnitDefinition, ...] = (
    UnitDefinition("g", "Grams (g)", ("gram", "grams", "g")),
    UnitDefinition("mg", "Milligrams (mg)", ("milligram", "milligrams", "mg")),
    UnitDefinition(
        "μg", "Micrograms (μg)", ("microgram", "micrograms", "mcg", "μg", "ug")
    ),
    UnitDefinition("kg", "Kilograms (kg)", ("kilogram", "kilograms", "kg")),
    UnitDefinition("oz", "Ounces (oz)", ("ounce", "ounces", "oz")),
    UnitDefinition("lb", "Pounds (lb)", ("pound", "pounds", "lb", "lbs")),
)

VOLUME_UNITS: tuple[UnitDefinition, ...] = (
    UnitDefinition("mL", "Milliliters (mL)", ("milliliter", "milliliters", "ml", "mL")),
    UnitDefinition("L", "Liters (L)", ("liter", "liters", "l", "L")),
    UnitDefinition("cup (US)", "Cups", ("cup", "cups")),
    UnitDefinition(
        "tbsp (US)", "Tablespoons (tbsp)", ("tablespoon", "tablespoons", "tbsp", "tbs")
    ),
    UnitDefinition("tsp (US)", "Teaspoons (tsp)", ("teaspoon", "teaspoons", "tsp")),
    UnitDefinition(
        "fl oz (US)",
        "Fluid ounces (fl oz)",
        ("fluid ounce", "fluid ounces", "fl oz", "floz"),
    ),
    UnitDefinition("pt (US)", "Pints (pt)", ("pint", "pints", "pt")),
    UnitDefinition("qt (US)", "Quarts (qt)", ("quart", "quarts", "qt")),
    UnitDefinition("gal (US)", "Gallons (gal)", ("gallon", "gallons", "gal")),
)

ENERGY_UNITS: tuple[UnitDefinition, ...] = (
    UnitDefinition("kcal", "Calories (kcal)", ("calorie", "calories", "kcal", "cal")),
    UnitDefinition("kJ", "Kilojoules (kJ)", ("kilojoule", "kilojoules", "kj", "kJ")),
    UnitDefinition("J", "Joules (J)", ("joule", "joules", "j", "J")),
    UnitDefinition("Wh", "Watt-hours (Wh)", ("watt-hour", "watt-hours", "wh", "Wh")),
)


def _unit_options(kind: str, units: tuple[UnitDefinition, ...]) -> list[SelectOption]:
    return [
        SelectOption(
            kind=kind, value=unit.value, label=unit.label, aliases=unit.aliases
        )
        for unit in units
    ]


def build_option_groups(target: Servable) -> list[OptionGroup]:
    """Return the picker sections ``target`` can actually resolve."""
    reference = target.reference()
    groups = [
        OptionGroup(
            label="Servings",
            options=[
                SelectOption(
                    kind=Count.kind,
                    value=Count.kind,
                    label="Servings",
                    aliases=("serving", "servings"),
                )
            ],
        )
    ]
    if reference.custom_sizes:
        groups.append(
            OptionGroup(
                label="Custom Sizes",
                options=[
                    SelectOption(
                        kind=CustomSize.kind,
                        value=custom.name,
                        label=custom.name,
                        aliases=(custom.name.lower(),),
                    )
                    for custom in reference.custom_sizes
                ],
            )
        )
    if reference.mass is not None:
        groups.append(OptionGroup("Mass", _unit_options(Mass.kind, MASS_UNITS)))
    if reference.volume is not None:
        groups.append(OptionGroup("Volume", _unit_options(Volume.kind, VOLUME_UNITS)))
    if reference.calories is not None:
        groups.append(OptionGroup("Energy", _unit_options(Energy.kind, ENERGY_UNITS)))
    return groups


def filter_groups(groups: list[OptionGroup], query: str | None) -> list[OptionGroup]:
    """Keep options whose label or aliases contain ``query``; drop empty sections."""
    if not query or not query.strip():
        return groups
    needle = query.strip().lower()
    filtered = []
    for group in groups:
        options = [
            option
            for option in group.options
            if needle in option.label.lower()
            or any(needle in alias.lower() for alias in option.aliases)
        ]
        if options:
            filtered.append(OptionGroup(label=group.label, options=options))
    return filtered
