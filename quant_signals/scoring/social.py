"""
Social post filtering and conversion to evidence.

Posts from tracked influencers become SOCIAL evidence when they mention one
of the influencer's topics and clear the engagement floor. Confidence grows
with engagement, saturating at the configured scale, and is scaled by the
influencer's weight.
"""

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

import structlog

from ..config.defaults import SocialParams
from ..errors import ConfigurationError, MalformedDataError
from ..utils.time import datetime_to_ms
from .evidence import EvidenceOrigin, EvidenceSource, SocialPayload

logger = structlog.get_logger(__name__)

# topic -> extra words that also count as a mention
TOPIC_ALIASES = {
    "token": ("coin", "alt"),
    "launch": ("drop",),
}


@dataclass(frozen=True)
class Influencer:
    handle: str
    weight: float
    min_engagement: int
    topics: tuple[str, ...]


@dataclass(frozen=True)
class SocialPost:
    id: str
    author: str
    text: str
    timestamp: int                      # epoch ms
    likes: int = 0
    retweets: int = 0
    replies: int = 0
    hashtags: tuple[str, ...] = ()
    url: Optional[str] = None


def _post_timestamp_ms(value: Any) -> int:
    if isinstance(value, datetime):
        return datetime_to_ms(value)
    return int(float(value) * 1000)


def parse_post(raw: Mapping[str, Any]) -> SocialPost:
    """
    Build a SocialPost from a feed record.

    Feed timestamps are epoch seconds or datetimes; both are converted to
    epoch milliseconds.
    Hashtags may be strings or objects with a 'text' field.
    """
    try:
        hashtags = tuple(
            str(tag.get("text", "")) if isinstance(tag, Mapping) else str(tag)
            for tag in raw.get("hashtags") or ()
        )
        return SocialPost(
            id=str(raw["id"]),
            author=str(raw.get("username") or raw.get("author") or ""),
            text=str(raw.get("text") or ""),
            timestamp=_post_timestamp_ms(raw["timestamp"]),
            likes=int(raw.get("likes") or 0),
            retweets=int(raw.get("retweets") or 0),
            replies=int(raw.get("replies") or 0),
            hashtags=hashtags,
            url=raw.get("permanentUrl") or raw.get("url"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedDataError(f"Invalid social post: {e}", raw_data=str(raw)[:100]) from e


def engagement(post: SocialPost) -> int:
    """Likes + retweets + replies"""
    return post.likes + post.retweets + post.replies


def has_min_engagement(post: SocialPost, min_engagement: int) -> bool:
    return engagement(post) >= min_engagement


def is_relevant(post: SocialPost, influencer: Influencer) -> bool:
    """True when the post text or hashtags mention one of the influencer's topics"""
    text = post.text.lower()
    hashtags = {tag.lower() for tag in post.hashtags}

    for topic in influencer.topics:
        topic = topic.lower()
        if topic in text or topic in hashtags:
            return True
        if any(alias in text for alias in TOPIC_ALIASES.get(topic, ())):
            return True
    return False


def post_to_evidence(post: SocialPost, influencer: Influencer,
                     params: Optional[SocialParams] = None) -> EvidenceSource:
    """Convert a post to SOCIAL evidence with engagement-scaled confidence"""
    params = params or SocialParams()
    total = engagement(post)
    confidence = min(total / params.engagement_scale, 1.0) * influencer.weight

    return EvidenceSource(
        origin=EvidenceOrigin.SOCIAL,
        timestamp=post.timestamp,
        confidence=confidence,
        payload=SocialPayload(
            url=post.url,
            text=post.text,
            engagement=total,
            likes=post.likes,
            retweets=post.retweets,
            replies=post.replies,
            author=post.author,
        ),
    )


def collect_evidence(posts_by_handle: Mapping[str, Iterable[SocialPost]],
                     influencers: Mapping[str, Influencer],
                     params: Optional[SocialParams] = None) -> list[EvidenceSource]:
    """
    Filter one polling cycle of posts into evidence.

    Posts from handles that are not tracked are ignored. De-duplication across
    cycles is the caller's job.
    """
    evidence = []
    for handle, posts in posts_by_handle.items():
        influencer = influencers.get(handle)
        if influencer is None:
            continue

        for post in posts:
            relevant = is_relevant(post, influencer)
            engaged = has_min_engagement(post, influencer.min_engagement)
            if relevant and engaged:
                evidence.append(post_to_evidence(post, influencer, params))
            else:
                logger.debug(
                    "Skipped social post",
                    handle=handle,
                    post_id=post.id,
                    topic_match=relevant,
                    engagement=engagement(post),
                    min_engagement=influencer.min_engagement
                )
    return evidence


def load_influencers(raw: Union[str, Iterable[Mapping[str, Any]]],
                     params: Optional[SocialParams] = None) -> dict[str, Influencer]:
    """
    Load influencer definitions, filling omitted fields from SocialParams.

    Args:
        raw: JSON array string or iterable of mappings with at least 'handle'

    Raises:
        ConfigurationError: On unparsable JSON, entries without a handle, or
            non-numeric or out-of-range weight and engagement values
    """
    params = params or SocialParams()

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid influencer config JSON: {e}") from e

    influencers = {}
    for entry in raw:
        handle = entry.get("handle") if isinstance(entry, Mapping) else None
        if not handle:
            raise ConfigurationError(f"Influencer entry missing handle: {entry!r}")

        raw_weight = entry.get("weight")
        raw_min_engagement = entry.get("minEngagement", entry.get("min_engagement"))
        try:
            weight = float(raw_weight) if raw_weight is not None else params.default_weight
            min_engagement = (int(raw_min_engagement) if raw_min_engagement is not None
                              else params.default_min_engagement)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid influencer config for {handle}: {e}") from e

        if not 0.0 <= weight <= 1.0:
            raise ConfigurationError(f"Influencer weight for {handle} must be within [0, 1]: {raw_weight}")
        topics = entry.get("topics")
        influencers[handle] = Influencer(
            handle=handle,
            weight=weight,
            min_engagement=min_engagement,
            topics=tuple(topics) if topics is not None else tuple(params.default_topics),
        )
    return influencers
