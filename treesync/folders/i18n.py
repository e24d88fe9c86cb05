"""Layered internationalisation configuration.

Site, collection, and collection-file settings are merged explicitly, with
later layers overriding earlier ones field by field:

    site  <  collection  <  file

A layer may be a mapping of settings, ``True`` (inherit unchanged), or
``False``/missing (disable i18n entirely). Inputs are never mutated.
"""

from __future__ import annotations

import typing as typ

import msgspec

from .models import DEFAULT_LOCALE, I18nConfig, I18nStructure


class RawI18nConfig(
    msgspec.Struct, frozen=True, kw_only=True, forbid_unknown_fields=True
):
    """Unresolved i18n settings as written in configuration files."""

    structure: I18nStructure | None = None
    locales: tuple[str, ...] | None = None
    default_locale: str | None = None
    save_all_locales: bool | None = None


I18nLayer: typ.TypeAlias = RawI18nConfig | bool | None


def overlay_i18n(base: RawI18nConfig, layer: RawI18nConfig) -> RawI18nConfig:
    """Return ``base`` with every field set on ``layer`` taking precedence."""
    changes = {
        name: value
        for name in layer.__struct_fields__
        if (value := getattr(layer, name)) is not None
    }
    return msgspec.structs.replace(base, **changes)


def _is_disabled(layer: I18nLayer) -> bool:
    return layer is None or layer is False


def _merge_layers(
    site: RawI18nConfig | None,
    collection: I18nLayer,
    file: I18nLayer,
    *,
    is_file: bool,
) -> RawI18nConfig | None:
    if site is None or _is_disabled(collection):
        return None

    merged = site
    if isinstance(collection, RawI18nConfig):
        merged = overlay_i18n(merged, collection)

    if is_file:
        if _is_disabled(file):
            return None
        if isinstance(file, RawI18nConfig):
            merged = overlay_i18n(merged, file)

    return merged


def resolve_i18n_config(
    site: RawI18nConfig | None,
    collection: I18nLayer,
    file: I18nLayer = None,
    *,
    is_file: bool = False,
) -> I18nConfig:
    """Resolve the effective i18n settings for a collection or collection file.

    Parameters
    ----------
    site : RawI18nConfig | None
        Site-wide defaults. Without them i18n is disabled everywhere.
    collection : I18nLayer
        The collection's ``i18n`` value.
    file : I18nLayer, optional
        The collection file's ``i18n`` value; only consulted when ``is_file``.
    is_file : bool, optional
        Whether the settings are for a file collection. File collections
        always use the ``single_file`` structure.

    Returns
    -------
    I18nConfig
        Normalised settings. When no locales survive the merge the result is
        disabled and uses the ``_default`` pseudo-locale.

    """
    merged = _merge_layers(site, collection, file, is_file=is_file)
    if merged is None:
        merged = RawI18nConfig()

    structure = "single_file" if is_file else merged.structure or "single_file"
    save_all_locales = (
        True if merged.save_all_locales is None else merged.save_all_locales
    )
    locales = tuple(merged.locales or ())
    if not locales:
        return I18nConfig(
            enabled=False,
            save_all_locales=save_all_locales,
            structure=structure,
        )

    default_locale = merged.default_locale
    if default_locale is None or default_locale not in locales:
        default_locale = locales[0]

    return I18nConfig(
        enabled=True,
        save_all_locales=save_all_locales,
        locales=locales,
        default_locale=default_locale,
        structure=structure,
    )


__all__ = [
    "DEFAULT_LOCALE",
    "I18nLayer",
    "RawI18nConfig",
    "overlay_i18n",
    "resolve_i18n_config",
]
