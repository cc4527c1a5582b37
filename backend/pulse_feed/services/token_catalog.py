from __future__ import annotations
from typing import NamedTuple
from urllib.parse import quote

from pulse_feed.services.sampling import Sampler


class CatalogEntry(NamedTuple):
    name: str
    symbol: str
    emoji: str


# Display identities, cycled by ordinal
TOKEN_CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry("Anime", "ANIME", "🎌"),
    CatalogEntry("Gmail", "GMAIL", "📧"),
    CatalogEntry("CLAUS", "CLAUS", "🎅"),
    CatalogEntry("$100", "$100", "💵"),
    CatalogEntry("X Money", "XMONEY", "💰"),
    CatalogEntry("SOL Christmas", "SOLXMAS", "🎄"),
    CatalogEntry("Emma AI", "EMMA", "🤖"),
    CatalogEntry("PUMPv2", "PUMP", "💊"),
    CatalogEntry("Neurosama", "NEURO", "🧠"),
    CatalogEntry("Pepe 2.0", "PEPE2", "🐸"),
    CatalogEntry("Wojak", "WOJAK", "😢"),
    CatalogEntry("Chad", "CHAD", "💪"),
    CatalogEntry("Moon", "MOON", "🌙"),
    CatalogEntry("Rocket", "ROCKET", "🚀"),
    CatalogEntry("Diamond", "DMD", "💎"),
    CatalogEntry("Fire", "FIRE", "🔥"),
    CatalogEntry("Ice", "ICE", "❄️"),
    CatalogEntry("Thunder", "THDR", "⚡"),
    CatalogEntry("Star", "STAR", "⭐"),
    CatalogEntry("Crown", "CROWN", "👑"),
)
CATALOG_SIZE = len(TOKEN_CATALOG)

AVATAR_PALETTE = ("3b82f6", "ef4444", "22c55e", "f59e0b", "ec4899", "a855f7", "06b6d4", "f97316")
AVATAR_BASE_URL = "https://ui-avatars.com/api/"

# Solana base58: no 0, O, I, l
ADDRESS_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz123456789"
ADDRESS_LENGTH = 44


class Identity(NamedTuple):
    name: str
    base_name: str
    symbol: str
    image_url: str


def avatar_color(name: str) -> str:
    """Palette colour for a name; depends only on its first character."""
    return AVATAR_PALETTE[ord(name[0]) % len(AVATAR_PALETTE)]


def avatar_url(name: str) -> str:
    return (
        f"{AVATAR_BASE_URL}?name={quote(name, safe='')}"
        f"&background={avatar_color(name)}&color=fff&size=64&bold=true"
    )


def identity_for(index: int) -> Identity:
    """Resolve the display identity for an ordinal.

    Ordinals past the end of the catalog wrap around and the display name
    gets a numeric suffix (``index // CATALOG_SIZE``); the symbol and avatar
    stay those of the base entry.
    """
    entry = TOKEN_CATALOG[index % CATALOG_SIZE]
    cycle = index // CATALOG_SIZE
    name = f"{entry.name} {cycle}" if cycle > 0 else entry.name
    return Identity(
        name=name,
        base_name=entry.name,
        symbol=entry.symbol,
        image_url=avatar_url(entry.name),
    )


def random_address(sampler: Sampler) -> str:
    return "".join(sampler.choice(ADDRESS_ALPHABET) for _ in range(ADDRESS_LENGTH))
