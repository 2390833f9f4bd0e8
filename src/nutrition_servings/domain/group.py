"""Product groups: foods composed of other products and groups.

A group has no nutrition of its own. Its "one serving" is the sum of what each
item contributes, where every item states how much of itself goes into one
serving of the group. Items that cannot be resolved at the size they ask for
fall back to one reference serving instead of failing the whole group; asking
the group itself for an unsupported size still raises.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from nutrition_servings.domain.custom_size import CustomSizeDefinition
from nutrition_servings.domain.errors import (
    CyclicReferenceError,
    ServingResolutionError,
    UnitConversionError,
)
from nutrition_servings.domain.nutrients import NutrientProfile
from nutrition_servings.domain.preparation import Preparation
from nutrition_servings.domain.records import (
    BarcodeRecord,
    GroupItemRecord,
    GroupRecord,
    ProductRecord,
)
from nutrition_servings.domain.resolution import (
    DEFAULT_MAX_DEPTH,
    ReferenceServing,
    resolve_scalar,
)
from nutrition_servings.domain.serving_size import (
    Count,
    ServingSize,
    serving_size_from_record,
    serving_size_or_default,
)
from nutrition_servings.domain.units import Quantity

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemServing:
    """Nutrition, mass and volume contributed by one item."""

    nutrition: NutrientProfile
    mass: Quantity | None = None
    volume: Quantity | None = None


@dataclass(frozen=True)
class GroupServing(ItemServing):
    """A group serving plus the number of group servings it represents."""

    servings: float = 1


@dataclass(frozen=True)
class Product:
    """A product and the ways it can be prepared."""

    preparations: list[Preparation] = field(default_factory=list)
    id: str | None = None
    name: str | None = None
    brand: str | None = None

    def preparation(self, preparation_id: str | None = None) -> Preparation | None:
        """Return the preparation with this id, else the first one."""
        for preparation in self.preparations:
            if preparation_id is not None and preparation.id == preparation_id:
                return preparation
        if self.preparations:
            return self.preparations[0]
        return None

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "Product":
        """Validate and build a product from an API record."""
        return cls.from_model(ProductRecord.model_validate(record))

    @classmethod
    def from_model(cls, record: ProductRecord) -> "Product":
        return cls(
            id=record.id,
            name=record.name,
            brand=record.brand,
            preparations=[Preparation.from_model(prep) for prep in record.preparations],
        )


@dataclass(frozen=True)
class Barcode:
    """Barcode printed on a group's packaging."""

    code: str
    notes: list[object] = field(default_factory=list)
    serving_size: ServingSize | None = None

    @classmethod
    def from_model(cls, record: BarcodeRecord) -> "Barcode":
        return cls(
            code=record.code,
            notes=list(record.notes),
            serving_size=serving_size_from_record(record.serving_size),
        )


@dataclass(frozen=True)
class GroupItem:
    """A product or nested group and how much of it goes into one group serving."""

    serving_size: ServingSize = field(default_factory=lambda: Count(1))
    preparation_id: str | None = None
    product: Product | None = None
    group: "CompositeGroup | None" = None

    def resolved_serving(
        self, *, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> ItemServing | None:
        """Return what this item contributes, or ``None`` if it has nothing to offer."""
        return _item_serving(self, (), max_depth)

    @classmethod
    def from_model(cls, record: GroupItemRecord) -> "GroupItem":
        return cls(
            serving_size=serving_size_or_default(record.serving_size),
            preparation_id=record.preparation_id,
            product=Product.from_model(record.product) if record.product else None,
            group=CompositeGroup.from_model(record.group) if record.group else None,
        )


@dataclass(frozen=True)
class CompositeGroup:
    """A named collection of items with an aggregate serving."""

    items: list[GroupItem] = field(default_factory=list)
    id: str | None = None
    name: str | None = None
    mass: Quantity | None = None
    volume: Quantity | None = None
    custom_sizes: list[CustomSizeDefinition] = field(default_factory=list)
    barcodes: list[Barcode] = field(default_factory=list)

    @property
    def one_serving(self) -> ItemServing:
        """Sum of every item's contribution, recomputed on each access."""
        return self._one_serving((self,), DEFAULT_MAX_DEPTH)

    def scalar(
        self, serving_size: ServingSize, *, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> float:
        """Return how many group servings ``serving_size`` represents."""
        return self._scalar(
            serving_size, self._one_serving((self,), max_depth), max_depth
        )

    def serving(
        self, serving_size: ServingSize, *, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> GroupServing:
        """Return nutrition, mass and volume for ``serving_size`` of the group."""
        return self._serving(serving_size, (self,), max_depth)

    def reference(self) -> ReferenceServing:
        """Reference values of one group serving."""
        return self._reference(self.one_serving)

    def resolved_profile(
        self, serving_size: ServingSize, *, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> NutrientProfile:
        return self.serving(serving_size, max_depth=max_depth).nutrition

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "CompositeGroup":
        """Validate and build a group from an API record."""
        return cls.from_model(GroupRecord.model_validate(record))

    @classmethod
    def from_model(cls, record: GroupRecord) -> "CompositeGroup":
        return cls(
            id=record.id,
            name=record.name,
            items=[GroupItem.from_model(item) for item in record.items],
            mass=Quantity.from_record(record.mass),
            volume=Quantity.from_record(record.volume),
            custom_sizes=[
                CustomSizeDefinition.from_model(custom)
                for custom in record.custom_sizes
            ],
            barcodes=[Barcode.from_model(barcode) for barcode in record.barcodes],
        )

    def _one_serving(
        self, ancestors: tuple["CompositeGroup", ...], max_depth: int
    ) -> ItemServing:
        servings = []
        for item in self.items:
            serving = _item_serving(item, ancestors, max_depth)
            if serving is not None:
                servings.append(serving)

        nutrition = NutrientProfile.zero()
        for serving in servings:
            nutrition = nutrition.add(serving.nutrition)

        mass = self.mass
        if mass is None:
            mass = _sum_if_complete([serving.mass for serving in servings])
        volume = self.volume
        if volume is None:
            volume = _sum_if_complete([serving.volume for serving in servings])
        return ItemServing(nutrition=nutrition, mass=mass, volume=volume)

    def _scalar(
        self, serving_size: ServingSize, one_serving: ItemServing, max_depth: int
    ) -> float:
        return resolve_scalar(
            self._reference(one_serving),
            serving_size,
            subject="group",
            max_depth=max_depth,
        )

    def _reference(self, one_serving: ItemServing) -> ReferenceServing:
        return ReferenceServing(
            mass=one_serving.mass,
            volume=one_serving.volume,
            calories=one_serving.nutrition.calories,
            custom_sizes=self.custom_sizes,
        )

    def _serving(
        self,
        serving_size: ServingSize,
        ancestors: tuple["CompositeGroup", ...],
        max_depth: int,
    ) -> GroupServing:
        one_serving = self._one_serving(ancestors, max_depth)
        factor = self._scalar(serving_size, one_serving, max_depth)
        return GroupServing(
            nutrition=one_serving.nutrition.scaled(factor),
            mass=_scaled(one_serving.mass, factor),
            volume=_scaled(one_serving.volume, factor),
            servings=factor,
        )


def _item_serving(
    item: GroupItem, ancestors: tuple[CompositeGroup, ...], max_depth: int
) -> ItemServing | None:
    if item.product is not None:
        preparation = item.product.preparation(item.preparation_id)
        if preparation is None:
            return None
        try:
            factor = preparation.scalar(item.serving_size, max_depth=max_depth)
        except CyclicReferenceError:
            raise
        except (ServingResolutionError, UnitConversionError) as exc:
            _logger.debug(
                "Using one serving of %s for %s: %s",
                item.product.name,
                item.serving_size,
                exc,
            )
            return ItemServing(
                nutrition=preparation.nutrition,
                mass=preparation.mass,
                volume=preparation.volume,
            )
        return ItemServing(
            nutrition=preparation.nutrition.scaled(factor),
            mass=_scaled(preparation.mass, factor),
            volume=_scaled(preparation.volume, factor),
        )

    if item.group is not None:
        group = item.group
        if any(group is ancestor for ancestor in ancestors):
            raise CyclicReferenceError(
                f"Group {group.name or group.id!r} contains itself"
            )
        nested = (*ancestors, group)
        try:
            serving = group._serving(item.serving_size, nested, max_depth)
        except CyclicReferenceError:
            raise
        except (ServingResolutionError, UnitConversionError) as exc:
            _logger.debug(
                "Using one serving of group %s for %s: %s",
                group.name,
                item.serving_size,
                exc,
            )
            return group._one_serving(nested, max_depth)
        return ItemServing(
            nutrition=serving.nutrition, mass=serving.mass, volume=serving.volume
        )

    return None


def _scaled(quantity: Quantity | None, factor: float) -> Quantity | None:
    return quantity.scaled(factor) if quantity is not None else None


def _sum_if_complete(quantities: list[Quantity | None]) -> Quantity | None:
    """Sum quantities only when every item has one."""
    if not quantities or any(quantity is None for quantity in quantities):
        return None
    total = quantities[0]
    for quantity in quantities[1:]:
        total = total.add(quantity)
    return total


Servable = Preparation | CompositeGroup
