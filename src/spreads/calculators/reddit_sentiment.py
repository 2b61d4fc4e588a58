"""Reddit post classification and the 0-100 Reddit Score."""

import re
from typing import Iterable, Mapping

from spreads.config.universe import (
    BEARISH_KEYWORDS,
    BULLISH_KEYWORDS,
    DEFAULT_SUBREDDIT_WEIGHT,
    SUBREDDIT_WEIGHTS,
)
from spreads.domain.models import (
    RedditPost,
    RedditSentimentData,
    Sentiment,
    SubredditData,
    SubredditSentiment,
)

SELFTEXT_LIMIT = 200
TOP_POSTS = 5


def mentions_symbol(symbol: str, text: str) -> bool:
    """Whole-word, case-insensitive ticker match."""
    return re.search(rf"\b{re.escape(symbol)}\b", text, re.IGNORECASE) is not None


def classify_post(title: str, selftext: str, score: int) -> Sentiment:
    """
    Keyword vote on the post text, with engagement as the tie-break.

    Keywords match as substrings of the lowercased title and body. On a tie,
    score > 50 reads as bullish and score < 5 as bearish.
    """
    text = f"{title} {selftext}".lower()
    bullish = sum(1 for k in BULLISH_KEYWORDS if k in text)
    bearish = sum(1 for k in BEARISH_KEYWORDS if k in text)

    if bullish > bearish:
        return Sentiment.BULLISH
    if bearish > bullish:
        return Sentiment.BEARISH
    if score > 50:
        return Sentiment.BULLISH
    if score < 5:
        return Sentiment.BEARISH
    return Sentiment.NEUTRAL


def sentiment_counts(posts: Iterable[RedditPost]) -> dict[Sentiment, int]:
    counts = {s: 0 for s in Sentiment}
    for post in posts:
        counts[post.sentiment] += 1
    return counts


def subreddit_score(data: SubredditData) -> float:
    """Unweighted 0-100 score for one subreddit: 60% mention share, 40% engagement, times mood."""
    mentions = data.mention_count
    total_posts = max(1, data.total_posts)

    percentage_score = min(50.0, mentions / total_posts * 100 * 5)

    if mentions:
        avg_upvotes = sum(p.score for p in data.posts) / mentions
        avg_comments = sum(p.num_comments for p in data.posts) / mentions
    else:
        avg_upvotes = avg_comments = 0.0
    engagement = max(0.0, min(30.0, avg_upvotes / 10)) + max(0.0, min(20.0, avg_comments / 5))

    if mentions:
        counts = sentiment_counts(data.posts)
        raw = (
            counts[Sentiment.BULLISH] * 1.5
            - counts[Sentiment.BEARISH] * 0.5
            + counts[Sentiment.NEUTRAL]
        ) / mentions
        multiplier = min(1.5, max(0.5, raw))
    else:
        multiplier = 1.0

    return (percentage_score * 0.6 + engagement * 0.4) * multiplier


def reddit_score(
    subreddits: list[SubredditData],
    weights: Mapping[str, float] = SUBREDDIT_WEIGHTS,
) -> int:
    """Weight-averaged subreddit scores, clamped to [0, 100]. Empty input scores 0."""
    if not subreddits:
        return 0
    weighted = 0.0
    total_weight = 0.0
    for data in subreddits:
        weight = weights.get(data.subreddit, DEFAULT_SUBREDDIT_WEIGHT)
        weighted += subreddit_score(data) * weight
        total_weight += weight
    if total_weight <= 0:
        return 0
    return max(0, min(100, round(weighted / total_weight)))


def overall_sentiment(counts: Mapping[Sentiment, int]) -> Sentiment:
    total = sum(counts.values())
    if total == 0:
        return Sentiment.NEUTRAL
    if counts.get(Sentiment.BULLISH, 0) / total > 0.5:
        return Sentiment.BULLISH
    if counts.get(Sentiment.BEARISH, 0) / total > 0.5:
        return Sentiment.BEARISH
    return Sentiment.NEUTRAL


def summarize_subreddit(data: SubredditData) -> SubredditSentiment:
    posts = data.posts
    upvotes = sum(p.score for p in posts)
    return SubredditSentiment(
        subreddit=data.subreddit,
        mention_count=len(posts),
        total_upvotes=upvotes,
        total_comments=sum(p.num_comments for p in posts),
        sentiment_score=round(upvotes / len(posts)) if posts else 0,
        top_post=max(posts, key=lambda p: p.score) if posts else None,
    )


def top_posts(posts: list[RedditPost], limit: int = TOP_POSTS) -> list[RedditPost]:
    """Bullish posts first, then by score."""
    ranked = sorted(posts, key=lambda p: (p.sentiment != Sentiment.BULLISH, -p.score))
    return ranked[:limit]


def aggregate_sentiment(
    symbol: str,
    period: str,
    subreddits: list[SubredditData],
    fetched_at: str,
) -> RedditSentimentData:
    all_posts = [p for d in subreddits for p in d.posts]
    breakdown = [summarize_subreddit(d) for d in subreddits]
    return RedditSentimentData(
        symbol=symbol,
        period=period,
        reddit_score=reddit_score(subreddits),
        sentiment=overall_sentiment(sentiment_counts(all_posts)),
        total_mentions=len(all_posts),
        total_upvotes=sum(b.total_upvotes for b in breakdown),
        total_comments=sum(b.total_comments for b in breakdown),
        fetched_at=fetched_at,
        subreddit_breakdown=breakdown,
        top_posts=top_posts(all_posts),
    )
