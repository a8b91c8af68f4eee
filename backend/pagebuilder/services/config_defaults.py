"""Default configuration per component type.

The default field set of a type is its schema: stored component configs are
overlaid on top of these on every read, so adding a key here is all it takes
for existing rows to pick it up. Never remove or rename a key without a data
migration.
"""

from collections.abc import Mapping
from typing import Any

COMPONENT_TYPES = ("navigation", "hero", "product_grid", "contact_form", "cart", "footer")

DEFAULT_VARIANT = "default"

_DEFAULT_CONFIGS: dict[str, dict[str, Any]] = {
    "navigation": {
        "backgroundColor": "#ffffff",
        "logoText": "LUXURY BRAND",
        "logoSize": "28px",
        "logoColor": "#000000",
        "linkColor": "#111111",
        "linkSize": "13px",
        "linkWeight": "400",
    },
    "hero": {
        "backgroundColor": "#f5f5f5",
        "title": "ELEGANCE REDEFINED",
        "titleSize": "64px",
        "titleColor": "#000000",
        "subtitle": "The new collection has arrived.",
        "subtitleSize": "18px",
        "subtitleColor": "#444444",
        "ctaText": "DISCOVER MORE",
        "ctaBackgroundColor": "#000000",
        "ctaTextColor": "#ffffff",
        "overlayOpacity": 0,
        "textAlign": "center",
    },
    "product_grid": {
        "backgroundColor": "#ffffff",
        "title": "LATEST ARRIVALS",
        "titleSize": "32px",
        "titleColor": "#000000",
    },
    "contact_form": {
        "backgroundColor": "#ffffff",
        "title": "CONTACT US",
        "titleSize": "32px",
        "submitButtonText": "SEND MESSAGE",
        "emailPlaceholder": "EMAIL ADDRESS",
        "messagePlaceholder": "YOUR MESSAGE",
    },
    "cart": {
        "backgroundColor": "#ffffff",
        "title": "SHOPPING BAG",
        "emptyText": "Your shopping bag is empty.",
    },
    "footer": {
        "backgroundColor": "#000000",
        "textColor": "#ffffff",
        "copyrightText": "© 2024 LUXURY BRAND. ALL RIGHTS RESERVED.",
    },
}

# Named presets layered between the defaults and caller overrides.
_VARIANT_PRESETS: dict[str, dict[str, dict[str, Any]]] = {
    "navigation": {
        "centered": {"layout": "centered"},
        "dark": {"backgroundColor": "#000000", "logoColor": "#ffffff", "linkColor": "#f5f5f5"},
    },
    "hero": {
        "split_left": {"layout": "split", "imagePosition": "left", "textAlign": "left"},
        "split_right": {"layout": "split", "imagePosition": "right", "textAlign": "left"},
        "minimal": {"backgroundColor": "#ffffff", "titleSize": "48px", "ctaText": ""},
    },
    "product_grid": {
        "compact": {"columns": 4, "titleSize": "24px"},
    },
    "footer": {
        "light": {"backgroundColor": "#ffffff", "textColor": "#000000"},
    },
}


def defaults_for(component_type: str) -> dict[str, Any]:
    """Return a fresh copy of the default config for a type ({} if unknown)."""
    return dict(_DEFAULT_CONFIGS.get(component_type, {}))


def variant_presets(component_type: str) -> dict[str, dict[str, Any]]:
    return {name: dict(preset) for name, preset in _VARIANT_PRESETS.get(component_type, {}).items()}


def variant_preset(component_type: str, variant: str) -> dict[str, Any]:
    return dict(_VARIANT_PRESETS.get(component_type, {}).get(variant, {}))


def merge_config(base: Mapping[str, Any], *overlays: Mapping[str, Any] | None) -> dict[str, Any]:
    """Overlay mappings onto base; later keys win. Inputs are never mutated."""
    merged = dict(base)
    for overlay in overlays:
        if overlay:
            merged.update(overlay)
    return merged


def with_defaults(component_type: str, stored: Mapping[str, Any] | None) -> dict[str, Any]:
    """Config as seen by readers: current defaults overlaid with what was stored."""
    return merge_config(defaults_for(component_type), stored)


def build_config(
    component_type: str,
    variant: str = DEFAULT_VARIANT,
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Config for a new component: defaults, then overrides, then the variant tag."""
    return merge_config(defaults_for(component_type), overrides, {"variant": variant})


def form_fields(component_type: str, config: Mapping[str, Any]) -> tuple[dict[str, Any], list[str]]:
    """Split config into fields an edit form can render and unrecognized keys.

    Recognized keys are the type's default field set plus ``variant``. Values
    for recognized keys missing from ``config`` come from the defaults.
    """
    recognized = set(_DEFAULT_CONFIGS.get(component_type, {})) | {"variant"}
    merged = with_defaults(component_type, config)
    fields = {k: v for k, v in merged.items() if k in recognized}
    unrecognized = sorted(k for k in config if k not in recognized)
    return fields, unrecognized
