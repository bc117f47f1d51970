"""Wizard field state and the store that owns it.

``WizardState`` is frozen: every update produces a new object so a value
handed out earlier (e.g. to a renderer or an in-flight submission) is never
changed underneath its holder.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from sitekit.models.site_config import DEFAULT_PRIMARY_COLOR, DEFAULT_SECONDARY_COLOR

ProductFieldType = Literal["text", "number", "boolean"]
PRODUCT_FIELD_TYPES: tuple[str, ...] = ("text", "number", "boolean")

INDUSTRIES: tuple[tuple[str, str], ...] = (
    ("consulting", "Consulting / Professional Services"),
    ("agency", "Creative Agency"),
    ("restaurant", "Restaurant / Food Service"),
    ("retail", "Retail / E-commerce"),
    ("healthcare", "Healthcare"),
    ("technology", "Technology"),
    ("other", "Other"),
)

COLOR_PRESETS: dict[str, tuple[str, str]] = {
    "Sky Blue": ("#0ea5e9", "#1e293b"),
    "Emerald": ("#10b981", "#1e293b"),
    "Violet": ("#8b5cf6", "#1e293b"),
    "Rose": ("#f43f5e", "#1e293b"),
    "Amber": ("#f59e0b", "#1e293b"),
    "Slate": ("#64748b", "#0f172a"),
}


class UnknownFieldError(KeyError):
    """Raised when updating a field the wizard does not have."""


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass(frozen=True)
class ProductField:
    """One custom product attribute definition (retail sites only)."""

    name: str = ""
    type: ProductFieldType = "text"
    required: bool = False

    def __post_init__(self) -> None:
        if self.type not in PRODUCT_FIELD_TYPES:
            raise ValueError(f"Unsupported product field type: {self.type!r}")

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "required": self.required}

    @classmethod
    def from_value(cls, value: ProductField | Mapping[str, Any]) -> ProductField:
        if isinstance(value, ProductField):
            return value
        return cls(
            name=str(value.get("name") or ""),
            type=str(value.get("type") or "text"),  # type: ignore[arg-type]
            required=_coerce_bool(value.get("required", False)),
        )


@dataclass(frozen=True)
class WizardState:
    business_name: str = ""
    tagline: str = ""
    description: str = ""
    industry: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    primary_color: str = DEFAULT_PRIMARY_COLOR
    secondary_color: str = DEFAULT_SECONDARY_COLOR
    enable_email: bool = False
    product_schema: tuple[ProductField, ...] = field(default_factory=tuple)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    def to_dict(self) -> dict[str, Any]:
        data = {name: getattr(self, name) for name in self.field_names()}
        data["product_schema"] = [item.to_dict() for item in self.product_schema]
        return data

    def product_schema_json(self) -> str:
        return json.dumps([item.to_dict() for item in self.product_schema])


def _coerce_product_schema(value: Any) -> tuple[ProductField, ...]:
    if isinstance(value, str):
        value = json.loads(value) if value.strip() else []
    if not isinstance(value, Iterable) or isinstance(value, Mapping):
        raise ValueError("product_schema must be a list of field definitions")
    return tuple(ProductField.from_value(item) for item in value)


def _coerce(name: str, value: Any) -> Any:
    if name == "product_schema":
        return _coerce_product_schema(value)
    if name == "enable_email":
        return bool(value)
    return "" if value is None else str(value)


class FormStateStore:
    """Single source of truth for the wizard's accumulated field values."""

    def __init__(self, state: WizardState | None = None) -> None:
        self._state = state or WizardState()

    @property
    def state(self) -> WizardState:
        return self._state

    def set_field(self, name: str, value: Any) -> WizardState:
        """Replace one field, keeping every other field as it was."""
        if name not in WizardState.field_names():
            raise UnknownFieldError(name)
        self._state = dataclasses.replace(self._state, **{name: _coerce(name, value)})
        return self._state

    def apply_preset(self, preset_name: str) -> WizardState:
        try:
            primary, secondary = COLOR_PRESETS[preset_name]
        except KeyError:
            raise ValueError(f"Unknown colour preset: {preset_name!r}") from None
        self._state = dataclasses.replace(
            self._state, primary_color=primary, secondary_color=secondary
        )
        return self._state

    # Product schema items

    def add_product_field(self) -> WizardState:
        return self.set_field("product_schema", (*self._state.product_schema, ProductField()))

    def update_product_field(self, index: int, **changes: Any) -> WizardState:
        items = list(self._state.product_schema)
        self._check_index(index, items)
        items[index] = dataclasses.replace(items[index], **changes)
        return self.set_field("product_schema", items)

    def remove_product_field(self, index: int) -> WizardState:
        items = list(self._state.product_schema)
        self._check_index(index, items)
        del items[index]
        return self.set_field("product_schema", items)

    @staticmethod
    def _check_index(index: int, items: list[ProductField]) -> None:
        if index < 0 or index >= len(items):
            raise IndexError(f"No product field at index {index}")
