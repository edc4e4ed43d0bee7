"""
Topic naming and region/source normalization.

Every boundary that accepts a client-supplied region or source goes through
normalize_region / normalize_source, and every topic string is built by
generate_topic, so the topic returned at add-time and the one rebuilt from
the subscription index are always the same string.
"""
from enum import Enum
from typing import Optional, Tuple

TOPIC_NAMESPACE = "valohub"

REGIONS = ("TR", "EU", "NA", "AP", "KR", "BR", "LATAM")
DEFAULT_REGION = "EU"


class Source(str, Enum):
    STORE = "store"
    NIGHT = "night"
    BUNDLE = "bundle"


SOURCES = tuple(s.value for s in Source)
DEFAULT_SOURCE = Source.STORE.value


def normalize_region(region: Optional[str]) -> str:
    """Case-insensitive match against REGIONS; anything else is EU."""
    if not isinstance(region, str) or not region:
        return DEFAULT_REGION
    candidate = region.upper()
    return candidate if candidate in REGIONS else DEFAULT_REGION


def normalize_source(source: Optional[str]) -> str:
    """Exact match against the known sources; anything else is store."""
    if isinstance(source, str) and source in SOURCES:
        return source
    return DEFAULT_SOURCE


def generate_topic(region: str, source: str, skin_id: str) -> str:
    """Build the canonical topic, e.g. valohub/EU/store/prime-vandal."""
    return f"{TOPIC_NAMESPACE}/{region}/{source}/{skin_id}"


def parse_topic(topic: str) -> Tuple[str, str, str]:
    """
    Split a topic back into (region, source, skin_id).

    The skin id is everything after the third separator, so ids that
    contain "/" survive the round trip.
    """
    parts = topic.split("/", 3)
    if len(parts) != 4 or parts[0] != TOPIC_NAMESPACE or not parts[3]:
        raise ValueError(f"Not a {TOPIC_NAMESPACE} topic: {topic!r}")
    _, region, source, skin_id = parts
    return region, source, skin_id
