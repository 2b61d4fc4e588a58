"""Reddit sentiment per symbol, the Reddit trending list and their cache warmer."""

import logging
from typing import Optional, Sequence

from spreads.calculators.reddit_sentiment import (
    SELFTEXT_LIMIT,
    aggregate_sentiment,
    classify_post,
    mentions_symbol,
)
from spreads.config.universe import (
    FALLBACK_REDDIT_TRENDING,
    REDDIT_TOP_SYMBOLS,
    STOCK_NAMES,
    SUBREDDITS,
)
from spreads.core.clock import Clock
from spreads.core.exceptions import UpstreamError
from spreads.domain.models import (
    DataSource,
    RedditPost,
    RedditSentimentData,
    Sentiment,
    SubredditData,
    TrendingRedditStock,
)
from spreads.domain.views import BatchReport, CachedResult
from spreads.providers.protocols import SocialPostsProvider
from spreads.services.cache_envelope import CacheEnvelope
from spreads.services.fetch_orchestrator import FetchOrchestrator
from spreads.services.stale_responder import StaleOnErrorResponder

logger = logging.getLogger(__name__)

PERIODS = {"day": "24h", "week": "7d"}
MIN_SUBREDDIT_ACTIVITY = 100
TRENDING_LIMIT = 10


def sentiment_key(symbol: str) -> str:
    return f"reddit:sentiment:{symbol}"


TRENDING_KEY = "reddit:trending"


class RedditService:
    """
    Sentiment for a symbol is computed for both periods and cached together
    as ``{data24h, data7d}``. Subreddits are fetched one at a time with a short
    delay; a failing subreddit counts as zero mentions.
    """

    def __init__(
        self,
        provider: SocialPostsProvider,
        responder: StaleOnErrorResponder,
        envelope: CacheEnvelope,
        clock: Clock,
        subreddit_orchestrator: FetchOrchestrator,
        trending_orchestrator: FetchOrchestrator,
        refresh_orchestrator: FetchOrchestrator,
        sentiment_ttl_seconds: int = 7200,
        sentiment_stale_seconds: int = 14400,
        trending_ttl_seconds: int = 7200,
        trending_symbol_count: int = 20,
        subreddits: Sequence[str] = SUBREDDITS,
        top_symbols: Sequence[str] = REDDIT_TOP_SYMBOLS,
    ):
        self._provider = provider
        self._responder = responder
        self._envelope = envelope
        self._clock = clock
        self._subreddit_orchestrator = subreddit_orchestrator
        self._trending_orchestrator = trending_orchestrator
        self._refresh_orchestrator = refresh_orchestrator
        self._sentiment_ttl = sentiment_ttl_seconds
        self._sentiment_stale = sentiment_stale_seconds
        self._trending_ttl = trending_ttl_seconds
        self._trending_symbol_count = trending_symbol_count
        self._subreddits = tuple(subreddits)
        self._top_symbols = tuple(top_symbols)

    # Upstream

    async def fetch_subreddit(self, symbol: str, subreddit: str, time_filter: str) -> SubredditData:
        raw_posts = await self._provider.search_posts(subreddit, symbol, time_filter)
        posts = []
        for raw in raw_posts:
            if not mentions_symbol(symbol, f"{raw.title} {raw.selftext}"):
                continue
            selftext = raw.selftext[:SELFTEXT_LIMIT]
            posts.append(
                RedditPost(
                    title=raw.title,
                    selftext=selftext,
                    score=raw.score,
                    num_comments=raw.num_comments,
                    subreddit=raw.subreddit or subreddit,
                    permalink=raw.permalink,
                    created_utc=raw.created_utc,
                    sentiment=classify_post(raw.title, selftext, raw.score),
                )
            )

        try:
            activity = await self._provider.count_recent_posts(subreddit, time_filter)
        except UpstreamError as e:
            logger.debug("Activity count unavailable for r/%s: %s", subreddit, e.message)
            activity = MIN_SUBREDDIT_ACTIVITY
        return SubredditData(
            subreddit=subreddit,
            posts=posts,
            total_posts=max(MIN_SUBREDDIT_ACTIVITY, activity),
        )

    async def compute_period(self, symbol: str, time_filter: str) -> RedditSentimentData:
        report = await self._subreddit_orchestrator.run(
            self._subreddits,
            lambda sub: self.fetch_subreddit(symbol, sub, time_filter),
        )
        if report.total and report.success_count == 0:
            raise UpstreamError("reddit", f"all subreddits failed for {symbol}: {report.errors[0]}")

        data = [
            r.value if r.success else SubredditData(subreddit=r.symbol, posts=[])
            for r in report.results
        ]
        return aggregate_sentiment(
            symbol, PERIODS[time_filter], data, self._clock.now().isoformat()
        )

    async def compute_sentiment(self, symbol: str) -> dict:
        day = await self.compute_period(symbol, "day")
        week = await self.compute_period(symbol, "week")
        return {"symbol": symbol, "data24h": day.to_dict(), "data7d": week.to_dict()}

    def empty_sentiment(self, symbol: str) -> dict:
        now = self._clock.now().isoformat()

        def empty(period: str) -> dict:
            return RedditSentimentData(
                symbol=symbol,
                period=period,
                reddit_score=0,
                sentiment=Sentiment.NEUTRAL,
                total_mentions=0,
                total_upvotes=0,
                total_comments=0,
                fetched_at=now,
            ).to_dict()

        return {"symbol": symbol, "data24h": empty("24h"), "data7d": empty("7d")}

    # Read paths

    async def get_sentiment(self, symbol: str, force_refresh: bool = False) -> CachedResult:
        symbol = symbol.upper()
        return await self._responder.serve(
            sentiment_key(symbol),
            lambda: self.compute_sentiment(symbol),
            self._sentiment_ttl,
            source=DataSource.REDDIT,
            retain_seconds=self._sentiment_stale,
            force_refresh=force_refresh,
            use_memory=True,
            fallback=lambda: self.empty_sentiment(symbol),
        )

    async def compute_trending(self) -> dict:
        symbols = self._top_symbols[: self._trending_symbol_count]
        report = await self._trending_orchestrator.run(
            symbols, lambda sym: self.compute_period(sym, "day")
        )

        stocks = []
        for outcome in report.results:
            data: Optional[RedditSentimentData] = outcome.value
            if not outcome.success or data is None or data.total_mentions <= 0:
                continue
            top = max(data.subreddit_breakdown, key=lambda s: s.mention_count, default=None)
            stocks.append(
                TrendingRedditStock(
                    symbol=data.symbol,
                    name=STOCK_NAMES.get(data.symbol, data.symbol),
                    reddit_score=data.reddit_score,
                    sentiment=data.sentiment.value,
                    total_mentions=data.total_mentions,
                    top_subreddit=top.subreddit if top else "wallstreetbets",
                )
            )
        stocks.sort(key=lambda s: s.reddit_score, reverse=True)
        return {
            "trending": [s.to_dict() for s in stocks[:TRENDING_LIMIT]],
            "fetchedAt": self._clock.now().isoformat(),
        }

    def fallback_trending(self) -> dict:
        return {
            "trending": [
                TrendingRedditStock(
                    symbol=sym,
                    name=STOCK_NAMES.get(sym, sym),
                    reddit_score=score,
                    sentiment=sentiment,
                    total_mentions=mentions,
                    top_subreddit=subreddit,
                ).to_dict()
                for sym, score, sentiment, mentions, subreddit in FALLBACK_REDDIT_TRENDING
            ],
            "fetchedAt": None,
        }

    async def get_trending(self, force_refresh: bool = False) -> CachedResult:
        return await self._responder.serve(
            TRENDING_KEY,
            self.compute_trending,
            self._trending_ttl,
            source=DataSource.REDDIT,
            force_refresh=force_refresh,
            use_memory=True,
            fallback=self.fallback_trending,
            is_usable=lambda payload: bool(payload["trending"]),
        )

    # Cache warmer

    async def refresh_symbol(self, symbol: str) -> str:
        payload = await self.compute_sentiment(symbol)
        self._envelope.write(
            sentiment_key(symbol), payload, self._sentiment_ttl, self._sentiment_stale
        )
        return symbol

    async def refresh_all(self, symbols: Optional[Sequence[str]] = None) -> BatchReport:
        """Recompute and store sentiment for every top symbol, then the trending list."""
        report = await self._refresh_orchestrator.run(
            symbols or self._top_symbols, self.refresh_symbol
        )
        await self.get_trending(force_refresh=True)
        return report
