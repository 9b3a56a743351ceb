import math
from typing import Dict, Iterable, List, Optional, Tuple, TYPE_CHECKING
from utils.constants import PREVIEW_MAX_CHARS

if TYPE_CHECKING:
    from models.models import Cluster, PublicPost


def is_finite_coordinate(value: Optional[float]) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def round_location(lat: float, lng: float, decimals: int = 2) -> Tuple[float, float]:
    """Round a coordinate pair for public display.

    Two decimals is roughly 1 km of resolution. Raises ``ValueError`` for
    non-finite or out-of-range input, so a raw reading never reaches storage.
    """
    if not (is_finite_coordinate(lat) and is_finite_coordinate(lng)):
        raise ValueError("Location must be a pair of finite numbers.")
    lat, lng = float(lat), float(lng)
    if abs(lat) > 90 or abs(lng) > 180:
        raise ValueError(f"Location out of range: {lat}, {lng}")
    # + 0.0 turns -0.0 into 0.0
    return round(lat, decimals) + 0.0, round(lng, decimals) + 0.0


def cluster_key(lat: float, lng: float, decimals: int = 4) -> str:
    lat_part = round(lat, decimals) + 0.0
    lng_part = round(lng, decimals) + 0.0
    return f"{lat_part:.{decimals}f},{lng_part:.{decimals}f}"


def build_clusters(posts: Iterable["PublicPost"], decimals: int = 4) -> List["Cluster"]:
    """Group public posts into map pins keyed by their coordinates.

    Posts without finite coordinates are dropped. Members of each cluster are
    ordered newest first and the cluster sits on its newest member. Clusters
    themselves are ordered newest first, then by key.
    """
    from models.models import Cluster

    groups: Dict[str, List["PublicPost"]] = {}
    for post in posts:
        if not (is_finite_coordinate(post.lat) and is_finite_coordinate(post.lng)):
            continue
        groups.setdefault(cluster_key(post.lat, post.lng, decimals), []).append(post)

    clusters = []
    for key, members in groups.items():
        members.sort(key=lambda p: p.created_at, reverse=True)
        head = members[0]
        clusters.append(Cluster(key=key, lat=head.lat, lng=head.lng, posts=members))

    clusters.sort(key=lambda c: c.key)
    clusters.sort(key=lambda c: c.posts[0].created_at, reverse=True)
    return clusters


def truncate_preview(text: str, limit: int = PREVIEW_MAX_CHARS) -> str:
    text = text or ""
    return text[:limit] + "…" if len(text) > limit else text
