"""Tests for social post filtering and evidence extraction"""

import json
from datetime import datetime, timezone

import pytest

from quant_signals.config.defaults import SocialParams
from quant_signals.errors import ConfigurationError, MalformedDataError
from quant_signals.scoring.evidence import EvidenceOrigin
from quant_signals.scoring.social import (
    Influencer,
    SocialPost,
    collect_evidence,
    engagement,
    is_relevant,
    load_influencers,
    parse_post,
    post_to_evidence,
)

ANALYST = Influencer(handle="analyst", weight=0.5, min_engagement=100, topics=("defi", "token"))


def _post(text="New defi protocol live", likes=300, retweets=100, replies=100, hashtags=()):
    return SocialPost(
        id="1",
        author="analyst",
        text=text,
        timestamp=1_700_000_000_000,
        likes=likes,
        retweets=retweets,
        replies=replies,
        hashtags=hashtags,
    )


class TestParsePost:
    def test_seconds_converted_to_ms(self):
        post = parse_post({
            "id": 42,
            "username": "analyst",
            "text": "gm",
            "timestamp": 1700000000,
            "likes": 5,
            "hashtags": ["DeFi", {"text": "Web3"}],
            "permanentUrl": "https://x.com/analyst/status/42",
        })
        assert post.id == "42"
        assert post.timestamp == 1_700_000_000_000
        assert post.hashtags == ("DeFi", "Web3")
        assert post.url == "https://x.com/analyst/status/42"
        assert post.retweets == 0

    def test_datetime_timestamp(self):
        post = parse_post({
            "id": 7,
            "timestamp": datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc),
        })
        assert post.timestamp == 1_700_000_000_000

    def test_missing_timestamp(self):
        with pytest.raises(MalformedDataError):
            parse_post({"id": 1, "text": "gm"})

    def test_bad_counts(self):
        with pytest.raises(MalformedDataError):
            parse_post({"id": 1, "timestamp": 1, "likes": "many"})


class TestRelevance:
    def test_topic_in_text_case_insensitive(self):
        assert is_relevant(_post(text="DEFI summer is back"), ANALYST)

    def test_topic_in_hashtags(self):
        assert is_relevant(_post(text="look at this", hashtags=("DeFi",)), ANALYST)

    def test_topic_alias(self):
        assert is_relevant(_post(text="this coin is moving"), ANALYST)

    def test_unrelated_post(self):
        assert not is_relevant(_post(text="good morning"), ANALYST)


class TestEvidenceExtraction:
    def test_confidence_scales_with_engagement_and_weight(self):
        source = post_to_evidence(_post(), ANALYST)
        # engagement 500 of 1000, weight 0.5
        assert source.origin is EvidenceOrigin.SOCIAL
        assert source.confidence == pytest.approx(0.25)
        assert source.payload.engagement == 500
        assert source.timestamp == 1_700_000_000_000

    def test_confidence_saturates(self):
        source = post_to_evidence(_post(likes=5000), ANALYST)
        assert source.confidence == pytest.approx(0.5)

    def test_custom_engagement_scale(self):
        source = post_to_evidence(_post(), ANALYST, SocialParams(engagement_scale=500.0))
        assert source.confidence == pytest.approx(0.5)

    def test_collect_filters_posts(self):
        posts = {
            "analyst": [
                _post(),
                _post(text="weather is nice"),
                _post(likes=10, retweets=0, replies=0),
            ],
            "stranger": [_post()],
        }
        evidence = collect_evidence(posts, {"analyst": ANALYST})
        assert len(evidence) == 1
        assert engagement(_post()) == evidence[0].payload.engagement


class TestLoadInfluencers:
    def test_json_with_defaults(self):
        raw = json.dumps([
            {"handle": "analyst", "weight": 0.9, "minEngagement": 10, "topics": ["nft"]},
            {"handle": "newcomer"},
        ])
        influencers = load_influencers(raw)

        assert influencers["analyst"].weight == 0.9
        assert influencers["analyst"].min_engagement == 10
        assert influencers["analyst"].topics == ("nft",)

        defaults = SocialParams()
        assert influencers["newcomer"].weight == defaults.default_weight
        assert influencers["newcomer"].min_engagement == defaults.default_min_engagement
        assert influencers["newcomer"].topics == defaults.default_topics

    def test_invalid_json(self):
        with pytest.raises(ConfigurationError):
            load_influencers("[{not json")

    def test_missing_handle(self):
        with pytest.raises(ConfigurationError):
            load_influencers([{"weight": 0.5}])

    def test_weight_out_of_range(self):
        with pytest.raises(ConfigurationError):
            load_influencers([{"handle": "loud", "weight": 2.0}])

    @pytest.mark.parametrize("entry", [
        {"handle": "loud", "weight": "heavy"},
        {"handle": "loud", "minEngagement": "lots"},
        {"handle": "loud", "weight": [0.5]},
    ])
    def test_non_numeric_values(self, entry):
        with pytest.raises(ConfigurationError) as exc_info:
            load_influencers([entry])
        assert "loud" in str(exc_info.value)
