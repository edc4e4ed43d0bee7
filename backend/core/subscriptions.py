"""
Subscription Index - reverse lookup from skin id to interested users.

Each bucket maps a skin id to the set of (anon_user_id, region, source)
subscriptions derived from wishlist items. The index has no state of its
own: WishlistStore writes to it under its lock, and an empty bucket is
removed immediately so the key set is exactly the set of wished-for skins.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from .topics import REGIONS, generate_topic


@dataclass(frozen=True)
class Subscription:
    """One user waiting for a skin in a region/source combination."""
    anon_user_id: str
    region: str
    source: str

    def to_dict(self, skin_id: str) -> Dict[str, str]:
        return {
            "anonUserId": self.anon_user_id,
            "region": self.region,
            "source": self.source,
            "topic": generate_topic(self.region, self.source, skin_id),
        }


def _region_order(region: str) -> int:
    return REGIONS.index(region) if region in REGIONS else len(REGIONS)


@dataclass
class SubscriptionIndex:
    """
    Reverse index keyed on skin id.

    Attributes:
        buckets: Dict mapping skin_id -> set of Subscription
    """
    buckets: Dict[str, Set[Subscription]] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert(self, skin_id: str, anon_user_id: str, region: str, source: str) -> None:
        """Add a subscription; duplicates collapse."""
        bucket = self.buckets.setdefault(skin_id, set())
        bucket.add(Subscription(anon_user_id, region, source))

    def remove(self, skin_id: str, anon_user_id: str, region: str, source: str) -> bool:
        """Remove a subscription, dropping the bucket once it is empty."""
        bucket = self.buckets.get(skin_id)
        if bucket is None:
            return False
        entry = Subscription(anon_user_id, region, source)
        if entry not in bucket:
            return False
        bucket.discard(entry)
        if not bucket:
            del self.buckets[skin_id]
        return True

    def relocate(
        self,
        skin_id: str,
        anon_user_id: str,
        old_region: str,
        new_region: str,
        source: str,
    ) -> None:
        """Swap the region of one subscription in place."""
        bucket = self.buckets.setdefault(skin_id, set())
        bucket.discard(Subscription(anon_user_id, old_region, source))
        bucket.add(Subscription(anon_user_id, new_region, source))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query_by_skin(self, skin_id: str) -> List[Dict[str, str]]:
        """All subscriptions for a skin, empty when nobody wants it."""
        bucket = self.buckets.get(skin_id, set())
        ordered = sorted(bucket, key=lambda s: (s.anon_user_id, _region_order(s.region), s.source))
        return [sub.to_dict(skin_id) for sub in ordered]

    def query_all_active(self, source: Optional[str] = None) -> List[Dict[str, Any]]:
        """Per skin, the distinct regions with at least one subscriber."""
        skins = []
        for skin_id, bucket in self.buckets.items():
            regions = {s.region for s in bucket if source is None or s.source == source}
            if not regions:
                continue
            skins.append({
                "skinId": skin_id,
                "regions": sorted(regions, key=_region_order),
            })
        return skins

    def query_by_region(self, region: str, source: Optional[str] = None) -> List[str]:
        """Distinct topics for one region, optionally for one source."""
        topics = set()
        for skin_id, bucket in self.buckets.items():
            for sub in bucket:
                if sub.region != region:
                    continue
                if source is not None and sub.source != source:
                    continue
                topics.add(generate_topic(sub.region, sub.source, skin_id))
        return sorted(topics)

    def entries_for_user(self, anon_user_id: str) -> Dict[str, Set[Subscription]]:
        """Every subscription belonging to one user, grouped by skin."""
        found: Dict[str, Set[Subscription]] = {}
        for skin_id, bucket in self.buckets.items():
            mine = {s for s in bucket if s.anon_user_id == anon_user_id}
            if mine:
                found[skin_id] = mine
        return found

    def has_skin(self, skin_id: str) -> bool:
        return skin_id in self.buckets

    @property
    def skin_count(self) -> int:
        return len(self.buckets)

    @property
    def subscription_count(self) -> int:
        return sum(len(bucket) for bucket in self.buckets.values())

    def snapshot(self) -> Dict[str, Set[Subscription]]:
        """Copy of the buckets, safe to inspect after the lock is released."""
        return {skin_id: set(bucket) for skin_id, bucket in self.buckets.items()}
