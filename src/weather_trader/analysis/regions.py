"""Region classification for location-appropriate recommendations."""

from typing import FrozenSet, NamedTuple, Optional, Tuple

from weather_trader.analysis.models import RegionProfile
from weather_trader.weather.models import Location


class BoundingBox(NamedTuple):
    """Inclusive latitude/longitude rectangle."""
    min_lon: float
    max_lon: float
    min_lat: float
    max_lat: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.min_lon <= lon <= self.max_lon and self.min_lat <= lat <= self.max_lat


class RegionRule(NamedTuple):
    region: str
    market: str
    currency: str
    commodity_relevance: Tuple[str, ...]
    countries: FrozenSet[str] = frozenset()
    box: Optional[BoundingBox] = None

    def matches(self, country: str, lat: float, lon: float) -> bool:
        if country in self.countries:
            return True
        return self.box is not None and self.box.contains(lat, lon)


EUROPE_COUNTRIES = frozenset({
    "germany", "france", "italy", "spain", "united kingdom", "uk",
    "netherlands", "belgium", "austria", "switzerland", "poland", "sweden",
    "norway", "denmark", "finland", "ireland", "portugal", "greece",
    "czech republic", "hungary",
})

MIDDLE_EAST_COUNTRIES = frozenset({
    "saudi arabia", "uae", "united arab emirates", "qatar", "kuwait",
    "iran", "iraq", "israel",
})

# Evaluated in order, first match wins. Boxes overlap, so order decides.
REGION_RULES: Tuple[RegionRule, ...] = (
    RegionRule(
        "North America", "US", "USD",
        ("corn", "soybeans", "wheat", "natural_gas", "oil"),
        frozenset({"united states", "usa", "us"}),
        BoundingBox(-130, -60, 25, 50),
    ),
    RegionRule(
        "North America", "Canada", "CAD",
        ("wheat", "canola", "natural_gas", "oil", "lumber"),
        frozenset({"canada"}),
        BoundingBox(-140, -50, 50, 85),
    ),
    RegionRule(
        "Europe", "EU", "EUR",
        ("wheat", "natural_gas", "wine", "olive_oil"),
        EUROPE_COUNTRIES,
        BoundingBox(-10, 40, 35, 70),
    ),
    # Shadowed by the Europe rule, whose country list also names the UK.
    RegionRule(
        "Europe", "UK", "GBP",
        ("wheat", "natural_gas", "barley"),
        frozenset({"united kingdom", "uk"}),
    ),
    RegionRule(
        "Asia Pacific", "Japan", "JPY",
        ("rice", "natural_gas", "lng"),
        frozenset({"japan"}),
        BoundingBox(129, 146, 31, 46),
    ),
    RegionRule(
        "Asia Pacific", "China", "CNY",
        ("rice", "soybeans", "wheat", "coal", "pork"),
        frozenset({"china"}),
        BoundingBox(73, 135, 18, 54),
    ),
    RegionRule(
        "Asia Pacific", "Australia", "AUD",
        ("wheat", "iron_ore", "coal", "wool", "cattle"),
        frozenset({"australia"}),
        BoundingBox(113, 154, -44, -10),
    ),
    RegionRule(
        "Asia Pacific", "India", "INR",
        ("rice", "wheat", "cotton", "sugar", "tea"),
        frozenset({"india"}),
        BoundingBox(68, 97, 8, 37),
    ),
    RegionRule(
        "Latin America", "Brazil", "BRL",
        ("coffee", "soybeans", "sugar", "orange_juice", "cattle"),
        frozenset({"brazil"}),
        BoundingBox(-74, -34, -34, 5),
    ),
    RegionRule(
        "Latin America", "LatAm", "USD",
        ("coffee", "sugar", "grains", "copper"),
        box=BoundingBox(-120, -34, -56, 33),
    ),
    RegionRule(
        "Middle East", "MENA", "USD",
        ("oil", "natural_gas", "dates"),
        MIDDLE_EAST_COUNTRIES,
        BoundingBox(25, 65, 12, 42),
    ),
    RegionRule(
        "Africa", "Africa", "USD",
        ("cocoa", "coffee", "oil", "gold", "cotton"),
        box=BoundingBox(-20, 55, -35, 37),
    ),
    RegionRule(
        "Asia Pacific", "SEA", "USD",
        ("rice", "palm_oil", "rubber", "coffee"),
        box=BoundingBox(90, 140, -10, 25),
    ),
)

GLOBAL_RULE = RegionRule("Global", "Global", "USD", ("oil", "gold", "grains"))


def classify_region(location: Location) -> RegionProfile:
    """Classify a location into its region profile.

    Country names are matched case-insensitively; missing coordinates are
    treated as 0.

    Args:
        location: Location with optional country and coordinates

    Returns:
        RegionProfile of the first matching rule, or the Global profile
    """
    country = (location.country or "").lower()
    lat = location.latitude or 0
    lon = location.longitude or 0

    rule = next(
        (r for r in REGION_RULES if r.matches(country, lat, lon)),
        GLOBAL_RULE,
    )
    return RegionProfile(
        region=rule.region,
        market=rule.market,
        currency=rule.currency,
        commodity_relevance=rule.commodity_relevance,
        country=location.country,
    )
