# Theme selection and contact links for public profile pages

from typing import Optional
from urllib.parse import quote
import re

from config.themes import PROFESSION_THEMES, THEME_PRESETS
from schemas.profiles import PublicProfile

DEFAULT_PROFESSION = "other"


def get_theme_for_profession(profession: Optional[str]) -> dict:
    preset = PROFESSION_THEMES.get(profession or DEFAULT_PROFESSION, PROFESSION_THEMES[DEFAULT_PROFESSION])
    return dict(THEME_PRESETS[preset])


def get_theme_for_profile(profile: PublicProfile) -> dict:
    # An explicit preset wins
    if profile.theme_preset and profile.theme_preset != "custom" and profile.theme_preset in THEME_PRESETS:
        return dict(THEME_PRESETS[profile.theme_preset])

    # Custom: profession theme with the accent swapped in
    if profile.theme_preset == "custom" and profile.accent_color:
        theme = get_theme_for_profession(profile.profession)
        theme.update({
            "accent": profile.accent_color,
            "accent_light": profile.accent_color,
            "accent_dark": profile.accent_color,
        })
        return theme

    return get_theme_for_profession(profile.profession)


def get_whatsapp_link(profile: PublicProfile) -> Optional[str]:
    number = re.sub(r"\D", "", profile.whatsapp or profile.phone or "")
    if not number:
        return None
    first_name = profile.full_name.split(" ")[0]
    return f"https://wa.me/{number}?text={quote(f'Hi {first_name}!', safe='!')}"


def get_contact_actions(profile: PublicProfile) -> dict:
    return {
        "call": f"tel:{profile.phone}" if profile.phone else None,
        "email": f"mailto:{profile.email}" if profile.email else None,
        "whatsapp": get_whatsapp_link(profile),
    }
