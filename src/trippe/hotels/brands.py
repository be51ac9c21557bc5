"""IHG brand codes and their display names."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

BRAND_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "ATWL": "Atwell Suites",
        "AVID": "avid Hotels",
        "CDLW": "Candlewood Suites",
        "HICP": "Crowne Plaza",
        "EVEN": "EVEN Hotels",
        "HOLI": "Holiday Inn",
        "HICV": "Holiday Inn Club Vacations",
        "HIEX": "Holiday Inn Express",
        "HEXS": "Holiday Inn Express & Suites",
        "INDG": "Hotel Indigo",
        "HLUX": "HUALUXE",
        "ICON": "InterContinental",
        "KIKI": "Kimpton",
        "MRMS": "Mr & Mrs Smith",
        "RGNT": "Regent",
        "SIXS": "Six Senses",
        "STAY": "Staybridge Suites",
        "LXLX": "Vignette Collection",
        "VXVX": "voco",
    }
)


def brand_name(brand_code: Optional[str]) -> Optional[str]:
    """Return the display name for ``brand_code``, or ``None`` when unknown."""
    if not brand_code:
        return None
    return BRAND_NAMES.get(brand_code.upper())
