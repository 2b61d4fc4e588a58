"""Reddit sentiment models."""

from dataclasses import dataclass, field
from typing import Optional

from spreads.domain.models.enums import Sentiment


@dataclass(frozen=True)
class RedditPost:
    """A post that mentions the symbol, already classified."""

    title: str
    score: int
    num_comments: int
    subreddit: str
    permalink: str
    created_utc: float
    sentiment: Sentiment
    selftext: str = ""

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "score": self.score,
            "numComments": self.num_comments,
            "subreddit": self.subreddit,
            "permalink": self.permalink,
            "createdUtc": self.created_utc,
            "sentiment": self.sentiment.value,
        }


@dataclass
class SubredditData:
    """Posts mentioning a symbol in one subreddit, plus that subreddit's activity level."""

    subreddit: str
    posts: list[RedditPost]
    total_posts: int = 100

    @property
    def mention_count(self) -> int:
        return len(self.posts)


@dataclass(frozen=True)
class SubredditSentiment:
    subreddit: str
    mention_count: int
    total_upvotes: int
    total_comments: int
    sentiment_score: int
    top_post: Optional[RedditPost] = None

    def to_dict(self) -> dict:
        return {
            "subreddit": self.subreddit,
            "mentionCount": self.mention_count,
            "totalUpvotes": self.total_upvotes,
            "totalComments": self.total_comments,
            "totalAwards": 0,
            "sentimentScore": self.sentiment_score,
            "topPost": (
                {
                    "title": self.top_post.title,
                    "score": self.top_post.score,
                    "permalink": self.top_post.permalink,
                }
                if self.top_post
                else None
            ),
        }


@dataclass
class RedditSentimentData:
    """Aggregated sentiment for one symbol over one period."""

    symbol: str
    period: str
    reddit_score: int
    sentiment: Sentiment
    total_mentions: int
    total_upvotes: int
    total_comments: int
    fetched_at: str
    subreddit_breakdown: list[SubredditSentiment] = field(default_factory=list)
    top_posts: list[RedditPost] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "period": self.period,
            "redditScore": self.reddit_score,
            "scoreChange": None,
            "sentiment": self.sentiment.value,
            "totalMentions": self.total_mentions,
            "totalUpvotes": self.total_upvotes,
            "totalComments": self.total_comments,
            "subredditBreakdown": [s.to_dict() for s in self.subreddit_breakdown],
            "topPosts": [p.to_dict() for p in self.top_posts],
            "trendingRank": None,
            "fetchedAt": self.fetched_at,
        }


@dataclass(frozen=True)
class TrendingRedditStock:
    symbol: str
    name: str
    reddit_score: int
    sentiment: str
    total_mentions: int
    top_subreddit: str

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "redditScore": self.reddit_score,
            "sentiment": self.sentiment,
            "totalMentions": self.total_mentions,
            "topSubreddit": self.top_subreddit,
        }
