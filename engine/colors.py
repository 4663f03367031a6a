"""Anzeigefarbe eines Abgabetermins, abgeleitet aus der Studiengruppe.

Der Hash ist ein fester 32-Bit-String-Hash (``h = c + (h << 5) - h``) und
nicht Pythons ``hash()``, das pro Prozess gesalzen wird. Kollisionen sind
erlaubt.
"""

from typing import Optional


def _string_hash(text: str) -> int:
    h = 0
    for ch in text:
        h = (ord(ch) + ((h << 5) - h)) & 0xFFFFFFFF
    # Vorzeichenbehaftet wie ein 32-Bit-Int
    return h - (1 << 32) if h & 0x80000000 else h


def color_of(group: Optional[str]) -> str:
    """Deterministische Farbe "#rrggbb" für eine Gruppe (None wie "")."""
    h = _string_hash(group or "")
    return "#" + "".join(f"{(h >> (i * 8)) & 0xFF:02x}" for i in range(3))
