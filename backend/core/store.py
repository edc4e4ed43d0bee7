"""
Wishlist store - per-user wishlists plus the subscription index they feed.

State is memory-only and lost on restart. One store instance is created
per app and shared by every request; a single lock covers both the user
map and the SubscriptionIndex so a reader never sees an item without its
subscription (or the reverse).
"""
import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from .subscriptions import Subscription, SubscriptionIndex
from .topics import (
    DEFAULT_REGION, DEFAULT_SOURCE,
    generate_topic, normalize_region, normalize_source,
)

logger = logging.getLogger(__name__)

UNKNOWN_SKIN_NAME = "Unknown"


class UserNotFoundError(LookupError):
    """Raised when an operation references an anonymous user we never saw."""

    def __init__(self, anon_user_id: str):
        super().__init__(f"User not found: {anon_user_id}")
        self.anon_user_id = anon_user_id


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def generate_anon_user_id() -> str:
    return f"anon_{uuid.uuid4().hex[:16]}"


@dataclass(frozen=True)
class WishlistItem:
    skin_id: str
    skin_name: str
    source: str
    added_at: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "skinId": self.skin_id,
            "skinName": self.skin_name,
            "source": self.source,
            "addedAt": self.added_at,
        }


@dataclass
class AnonUser:
    anon_user_id: str
    region: str
    created_at: str
    updated_at: str
    items: List[WishlistItem] = field(default_factory=list)

    def find_item(self, skin_id: str, source: str) -> Optional[WishlistItem]:
        for item in self.items:
            if item.skin_id == skin_id and item.source == source:
                return item
        return None

    def topics(self) -> List[str]:
        return [generate_topic(self.region, i.source, i.skin_id) for i in self.items]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "region": self.region,
            "items": [i.to_dict() for i in self.items],
            "topics": self.topics(),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


class WishlistStore:
    """
    Forward index (user -> items) and reverse index (skin -> subscriptions).

    Args:
        index: SubscriptionIndex to maintain; a fresh one by default
        id_factory: Callable producing new anonymous user ids
        clock: Callable returning the current timestamp string
    """

    def __init__(
        self,
        index: Optional[SubscriptionIndex] = None,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], str]] = None,
    ):
        self.index = index if index is not None else SubscriptionIndex()
        self._users: Dict[str, AnonUser] = {}
        self._lock = threading.RLock()
        self._new_id = id_factory or generate_anon_user_id
        self._now = clock or utc_now_iso

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def _create_user(self, anon_user_id: str, region: str) -> AnonUser:
        now = self._now()
        user = AnonUser(anon_user_id=anon_user_id, region=region, created_at=now, updated_at=now)
        self._users[anon_user_id] = user
        return user

    def register_user(self, region: Optional[str] = None) -> Tuple[str, str]:
        """Create an empty user with a fresh id. Returns (anon_user_id, region)."""
        region = normalize_region(region)
        with self._lock:
            anon_user_id = self._new_id()
            while anon_user_id in self._users:
                anon_user_id = self._new_id()
            self._create_user(anon_user_id, region)
        logger.info(f"Registered user {anon_user_id} in region {region}")
        return anon_user_id, region

    def get_or_create_user(self, anon_user_id: str) -> AnonUser:
        """Return the user, creating an empty EU record if it is new."""
        with self._lock:
            user = self._users.get(anon_user_id)
            if user is None:
                user = self._create_user(anon_user_id, DEFAULT_REGION)
                logger.info(f"Created user {anon_user_id} on first wishlist write")
            return user

    def set_user_region(self, anon_user_id: str, region: Optional[str]) -> str:
        """
        Move a user to another region.

        Every subscription the user holds is relocated in the same critical
        section, so no subscription ever points at the previous region once
        this returns.

        Raises:
            UserNotFoundError: if the user does not exist
        """
        region = normalize_region(region)
        with self._lock:
            user = self._users.get(anon_user_id)
            if user is None:
                raise UserNotFoundError(anon_user_id)

            old_region = user.region
            user.region = region
            user.updated_at = self._now()
            for item in user.items:
                self.index.relocate(item.skin_id, anon_user_id, old_region, region, item.source)
            moved = len(user.items)

        if old_region != region:
            logger.info(
                f"User {anon_user_id} moved {old_region} -> {region} "
                f"({moved} subscriptions relocated)"
            )
        return region

    def get_user(self, anon_user_id: str) -> Dict[str, Any]:
        """Wishlist view for a user; unknown users get an empty EU view."""
        with self._lock:
            user = self._users.get(anon_user_id)
            if user is None:
                return {"region": DEFAULT_REGION, "items": [], "topics": []}
            return user.to_dict()

    def has_user(self, anon_user_id: str) -> bool:
        with self._lock:
            return anon_user_id in self._users

    # ------------------------------------------------------------------
    # Wishlist items
    # ------------------------------------------------------------------

    def add_item(
        self,
        anon_user_id: str,
        skin_id: str,
        skin_name: Optional[str] = None,
        source: Optional[str] = None,
    ) -> Tuple[WishlistItem, str]:
        """
        Add a skin to a user's wishlist.

        Re-adding an existing (skin_id, source) pair changes nothing and
        returns the stored item.

        Returns:
            (item, topic) where topic is the channel the user should follow

        Raises:
            ValueError: if skin_id is empty
        """
        if not skin_id:
            raise ValueError("skinId required")
        source = normalize_source(source)

        with self._lock:
            user = self.get_or_create_user(anon_user_id)
            item = user.find_item(skin_id, source)
            if item is None:
                now = self._now()
                item = WishlistItem(
                    skin_id=skin_id,
                    skin_name=skin_name or UNKNOWN_SKIN_NAME,
                    source=source,
                    added_at=now,
                )
                user.items.append(item)
                user.updated_at = now
                self.index.insert(skin_id, anon_user_id, user.region, source)
                logger.debug(f"User {anon_user_id} added {skin_id} ({source})")
            topic = generate_topic(user.region, source, skin_id)

        return item, topic

    def remove_item(self, anon_user_id: str, skin_id: str, source: Optional[str] = None) -> bool:
        """
        Remove a skin from a user's wishlist.

        The source is matched exactly as given (default "store"); an item
        that is not on the list is reported as False, not an error.

        Raises:
            UserNotFoundError: if the user does not exist
        """
        source = source or DEFAULT_SOURCE
        with self._lock:
            user = self._users.get(anon_user_id)
            if user is None:
                raise UserNotFoundError(anon_user_id)

            item = user.find_item(skin_id, source)
            if item is None:
                return False

            user.items.remove(item)
            user.updated_at = self._now()
            self.index.remove(skin_id, anon_user_id, user.region, source)

        logger.debug(f"User {anon_user_id} removed {skin_id} ({source})")
        return True

    # ------------------------------------------------------------------
    # Worker reads - served from the subscription index only
    # ------------------------------------------------------------------

    def subscriptions_for_skin(self, skin_id: str) -> List[Dict[str, str]]:
        with self._lock:
            return self.index.query_by_skin(skin_id)

    def active_skins(self, source: Optional[str] = None) -> List[Dict[str, Any]]:
        with self._lock:
            return self.index.query_all_active(source)

    def topics_for_region(self, region: Optional[str], source: Optional[str] = None) -> List[str]:
        region = normalize_region(region)
        with self._lock:
            return self.index.query_by_region(region, source)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "users": len(self._users),
                "skins": self.index.skin_count,
                "subscriptions": self.index.subscription_count,
            }

    def check_consistency(self) -> List[str]:
        """
        Compare both indexes and describe every mismatch.

        Returns an empty list when each wishlist item has exactly one
        matching subscription and nothing else is in the index.
        """
        problems = []
        with self._lock:
            expected: Dict[str, set] = {}
            for user in self._users.values():
                for item in user.items:
                    expected.setdefault(item.skin_id, set()).add(
                        Subscription(user.anon_user_id, user.region, item.source)
                    )
            actual = self.index.snapshot()

        for skin_id, bucket in actual.items():
            if not bucket:
                problems.append(f"empty bucket left for {skin_id}")
            for sub in bucket - expected.get(skin_id, set()):
                problems.append(f"orphan subscription {sub} for {skin_id}")
        for skin_id, subs in expected.items():
            for sub in subs - actual.get(skin_id, set()):
                problems.append(f"missing subscription {sub} for {skin_id}")
        return problems
