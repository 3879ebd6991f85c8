"""User-facing error strings in French and English.

The guestbook is French-first; English is served when the client's
``Accept-Language`` header prefers it.
"""

from __future__ import annotations

from typing import get_args

from flagbook.core.settings import LangName, load_settings

TRANSLATIONS: dict[LangName, dict[str, str]] = {
    "fr": {
        "reserved": "Cette zone est reservee.",
        "occupied": "Cette cellule est deja prise.",
        "out_of_bounds": "Cette cellule est en dehors du drapeau.",
        "grid_full": "Le drapeau est complet, plus aucune place disponible.",
        "all_required": "Tous les champs sont requis.",
        "recaptcha_failed": "Verification reCAPTCHA echouee.",
        "no_file": "Aucun fichier.",
        "unsupported_type": "Type de fichier non supporte. Utilise JPG, PNG, GIF ou WebP.",
        "too_large": "Fichier trop volumineux (max {max_mb} Mo).",
        "not_found": "Introuvable.",
    },
    "en": {
        "reserved": "This area is reserved.",
        "occupied": "This cell is already taken.",
        "out_of_bounds": "This cell is outside the flag.",
        "grid_full": "The flag is full, there is no space left.",
        "all_required": "All fields are required.",
        "recaptcha_failed": "reCAPTCHA verification failed.",
        "no_file": "No file.",
        "unsupported_type": "Unsupported file type. Use JPG, PNG, GIF or WebP.",
        "too_large": "File too large (max {max_mb} MB).",
        "not_found": "Not found.",
    },
}

SUPPORTED: tuple[LangName, ...] = get_args(LangName)


def pick_lang(accept_language: str | None) -> LangName:
    """Return the first supported language in an ``Accept-Language`` header.

    Quality weights are ignored; order in the header is taken as preference.
    """
    for part in (accept_language or "").split(","):
        code = part.split(";")[0].strip().lower()[:2]
        if code in SUPPORTED:
            return code  # type: ignore[return-value]
    return load_settings().default_lang


def translate(key: str, lang: LangName, **params: object) -> str:
    """Look up ``key`` for ``lang`` and format it with ``params``."""
    return TRANSLATIONS[lang][key].format(**params)


__all__ = ["TRANSLATIONS", "pick_lang", "translate"]
