"""Fixed symbol universes, static fallbacks and other named constants."""

SUBREDDITS = ("wallstreetbets", "stocks", "investing", "options")

SUBREDDIT_WEIGHTS = {
    "wallstreetbets": 1.0,
    "stocks": 0.8,
    "options": 0.7,
    "investing": 0.6,
}
DEFAULT_SUBREDDIT_WEIGHT = 0.5

BULLISH_KEYWORDS = (
    "calls", "call", "moon", "bullish", "buy", "buying", "long", "breakout",
    "rally", "pump", "rocket", "gain", "gains", "squeeze", "yolo", "diamond hands",
    "hold", "hodl", "bull", "up", "green", "profit", "win", "winning", "tendies",
    "bullrun", "surge", "soaring", "all time high", "ath",
)

BEARISH_KEYWORDS = (
    "puts", "put", "short", "shorting", "sell", "selling", "crash", "dump",
    "bear", "bearish", "down", "red", "loss", "losses", "rip", "dead", "tank",
    "tanking", "bag holder", "bagholder", "fud", "panic", "drop", "dropping",
    "plunge", "collapse", "overvalued", "bubble", "drill", "drilling",
)

REDDIT_TOP_SYMBOLS = (
    "NVDA", "TSLA", "AAPL", "MSFT", "META", "AMZN", "GOOGL", "AMD", "NFLX", "JPM",
    "PLTR", "GME", "AMC", "SPY", "QQQ", "COIN", "SOFI", "NIO", "RIVN", "LCID",
    "INTC", "BA", "DIS", "V", "MA", "PYPL", "SQ", "SHOP", "ROKU", "UBER",
    "CRM", "ORCL", "SNOW", "NOW", "ADBE", "AVGO", "MU", "QCOM", "ARM", "SMCI",
)

STOCK_NAMES = {
    "NVDA": "NVIDIA Corporation",
    "TSLA": "Tesla, Inc.",
    "AAPL": "Apple Inc.",
    "MSFT": "Microsoft Corporation",
    "META": "Meta Platforms, Inc.",
    "AMZN": "Amazon.com, Inc.",
    "GOOGL": "Alphabet Inc.",
    "AMD": "Advanced Micro Devices",
    "NFLX": "Netflix, Inc.",
    "JPM": "JPMorgan Chase & Co.",
    "PLTR": "Palantir Technologies",
    "GME": "GameStop Corp.",
    "AMC": "AMC Entertainment",
    "SPY": "SPDR S&P 500 ETF",
    "QQQ": "Invesco QQQ Trust",
    "COIN": "Coinbase Global",
    "SOFI": "SoFi Technologies",
    "NIO": "NIO Inc.",
    "RIVN": "Rivian Automotive",
    "LCID": "Lucid Group",
    "INTC": "Intel Corporation",
    "BA": "Boeing Company",
    "DIS": "Walt Disney Company",
    "V": "Visa Inc.",
    "MA": "Mastercard Inc.",
    "PYPL": "PayPal Holdings",
    "SQ": "Block, Inc.",
    "SHOP": "Shopify Inc.",
    "ROKU": "Roku, Inc.",
    "UBER": "Uber Technologies",
    "CRM": "Salesforce, Inc.",
    "ORCL": "Oracle Corporation",
    "SNOW": "Snowflake Inc.",
    "NOW": "ServiceNow, Inc.",
    "ADBE": "Adobe Inc.",
    "AVGO": "Broadcom Inc.",
    "MU": "Micron Technology",
    "QCOM": "QUALCOMM Inc.",
    "ARM": "Arm Holdings",
    "SMCI": "Super Micro Computer",
}

# (symbol, redditScore, sentiment, totalMentions, topSubreddit)
FALLBACK_REDDIT_TRENDING = (
    ("NVDA", 85, "bullish", 1250, "wallstreetbets"),
    ("TSLA", 78, "bullish", 980, "wallstreetbets"),
    ("AAPL", 65, "neutral", 720, "stocks"),
    ("AMD", 62, "bullish", 650, "wallstreetbets"),
    ("PLTR", 58, "bullish", 520, "wallstreetbets"),
    ("META", 55, "neutral", 480, "stocks"),
    ("MSFT", 52, "neutral", 420, "investing"),
    ("GOOGL", 48, "neutral", 380, "stocks"),
    ("AMZN", 45, "neutral", 350, "investing"),
    ("SPY", 42, "neutral", 320, "options"),
)

# (symbol, watchlistCount, sentiment)
FALLBACK_TRENDING = (
    ("NVDA", 500000, "bullish"),
    ("TSLA", 450000, "bullish"),
    ("AAPL", 400000, "neutral"),
    ("MSFT", 350000, "bullish"),
    ("META", 320000, "bullish"),
    ("AMZN", 300000, "neutral"),
    ("GOOGL", 280000, "neutral"),
    ("AMD", 260000, "bullish"),
    ("NFLX", 240000, "neutral"),
    ("JPM", 220000, "neutral"),
)

# region code -> (display name, exchange, symbols)
HEATMAP_REGIONS = {
    "US": ("United States", "NASDAQ/NYSE", (
        "AAPL", "MSFT", "GOOGL", "AMZN", "NVDA", "META", "TSLA", "BRK-B", "UNH", "JNJ",
        "JPM", "V", "XOM", "PG", "MA", "HD", "CVX", "MRK", "ABBV", "LLY",
        "PEP", "KO", "COST", "BAC", "PFE", "WMT", "TMO", "CSCO", "MCD", "DIS",
    )),
    "NASDAQ": ("NASDAQ", "NASDAQ", (
        "AVGO", "ASML", "SHOP", "AMD", "PANW", "AMAT", "LRCX", "KLAC", "SNPS", "CDNS",
        "MRVL", "CRWD", "FTNT", "WDAY", "DXCM", "TEAM", "ZS", "MNST", "ABNB", "DASH",
    )),
    "UK": ("United Kingdom", "LSE", (
        "SHEL.L", "AZN.L", "HSBA.L", "ULVR.L", "DGE.L", "BP.L", "GSK.L", "RIO.L", "NG.L", "REL.L",
    )),
    "HK": ("Hong Kong", "HKEX", (
        "0700.HK", "9988.HK", "0005.HK", "0941.HK", "0388.HK", "1299.HK", "0939.HK", "2318.HK",
        "1398.HK", "0011.HK",
    )),
    "CN": ("China", "SSE/SZSE", (
        "600519.SS", "600036.SS", "601318.SS", "600276.SS", "600887.SS", "000858.SZ",
        "000333.SZ", "000002.SZ", "300750.SZ", "002594.SZ",
    )),
    "JP": ("Japan", "TSE", (
        "7203.T", "6758.T", "9984.T", "6861.T", "9432.T", "8306.T", "6098.T", "9433.T",
        "8035.T", "7267.T",
    )),
    "SG": ("Singapore", "SGX", (
        "D05.SI", "O39.SI", "U11.SI", "C31.SI", "Z74.SI", "C38U.SI", "G13.SI", "C52.SI",
        "N2IU.SI", "BN4.SI",
    )),
    "KR": ("South Korea", "KRX", (
        "005930.KS", "000660.KS", "035420.KS", "005380.KS", "051910.KS", "006400.KS",
        "035720.KS", "005490.KS", "068270.KS", "207940.KS",
    )),
    "IN": ("India", "NSE", (
        "RELIANCE.NS", "TCS.NS", "HDFCBANK.NS", "INFY.NS", "HINDUNILVR.NS", "ICICIBANK.NS",
        "BHARTIARTL.NS", "SBIN.NS", "ITC.NS", "BAJFINANCE.NS",
    )),
}

SCREENER_SYMBOLS = (
    "AAPL", "MSFT", "GOOGL", "AMZN", "NVDA", "META", "TSLA", "BRK.B", "UNH", "JNJ",
    "JPM", "V", "XOM", "PG", "MA", "HD", "CVX", "MRK", "ABBV", "LLY",
    "PEP", "KO", "COST", "BAC", "PFE", "WMT", "TMO", "CSCO", "MCD", "DIS",
    "ABT", "ACN", "DHR", "VZ", "ADBE", "NKE", "CMCSA", "TXN", "NEE", "PM",
    "WFC", "BMY", "COP", "RTX", "UNP", "MS", "UPS", "ORCL", "HON", "INTC",
    "IBM", "LOW", "QCOM", "GE", "CAT", "AMGN", "BA", "SPGI", "GS", "ELV",
    "SBUX", "DE", "INTU", "BLK", "ISRG", "GILD", "AXP", "MDLZ", "ADI", "SYK",
    "AMD", "PYPL", "CRM", "NOW", "CRWD", "PANW", "DDOG", "SNOW", "NET", "MDB",
    "ZS", "TEAM", "WDAY", "VEEV", "TTD", "OKTA", "ZM", "DOCU", "ROKU", "UBER",
    "DASH", "ABNB", "COIN", "PLTR", "SHOP", "BABA", "JD", "PDD", "NIO", "MRNA",
)

# symbol -> (name, sector, industry)
STOCK_METADATA = {
    "AAPL": ("Apple Inc.", "Technology", "Consumer Electronics"),
    "MSFT": ("Microsoft Corporation", "Technology", "Software"),
    "GOOGL": ("Alphabet Inc.", "Communication Services", "Internet Services"),
    "AMZN": ("Amazon.com Inc.", "Consumer Discretionary", "E-Commerce"),
    "NVDA": ("NVIDIA Corporation", "Technology", "Semiconductors"),
    "META": ("Meta Platforms Inc.", "Communication Services", "Social Media"),
    "TSLA": ("Tesla Inc.", "Consumer Discretionary", "Electric Vehicles"),
    "BRK.B": ("Berkshire Hathaway Inc.", "Financials", "Insurance"),
    "UNH": ("UnitedHealth Group Inc.", "Healthcare", "Health Insurance"),
    "JNJ": ("Johnson & Johnson", "Healthcare", "Pharmaceuticals"),
    "JPM": ("JPMorgan Chase & Co.", "Financials", "Banks"),
    "V": ("Visa Inc.", "Financials", "Credit Services"),
    "XOM": ("Exxon Mobil Corporation", "Energy", "Oil & Gas"),
    "PG": ("Procter & Gamble Co.", "Consumer Staples", "Household Products"),
    "MA": ("Mastercard Inc.", "Financials", "Credit Services"),
}

# Served while the screener list has never been warmed.
# (symbol, price, change, changesPercentage, marketCap, pe, eps, dividendYield, exchange,
#  dayHigh, dayLow, yearHigh, yearLow); names and sectors come from STOCK_METADATA
FALLBACK_SCREENER = (
    ("MSFT", 378.91, 4.23, 1.13, 2.81e12, 35.2, 10.76, 0.8, "NASDAQ", 381.50, 375.20, 390.00, 275.00),
    ("AAPL", 178.72, 2.15, 1.22, 2.80e12, 28.5, 6.27, 0.5, "NASDAQ", 180.12, 176.50, 199.62, 164.08),
    ("AMZN", 178.25, 2.80, 1.60, 1.85e12, 62.4, 2.86, None, "NASDAQ", 180.50, 175.80, 189.00, 118.35),
    ("GOOGL", 141.80, 1.95, 1.39, 1.78e12, 25.1, 5.65, None, "NASDAQ", 143.20, 140.10, 153.78, 102.63),
    ("META", 505.95, 8.20, 1.65, 1.30e12, 32.5, 15.57, None, "NASDAQ", 510.00, 498.00, 531.49, 274.38),
    ("NVDA", 495.22, 12.50, 2.59, 1.22e12, 65.8, 7.53, 0.04, "NASDAQ", 502.00, 485.00, 505.00, 138.84),
    ("BRK.B", 363.54, -1.20, -0.33, 7.90e11, 8.5, 42.77, None, "NYSE", 366.00, 362.00, 375.00, 294.00),
    ("TSLA", 248.50, 5.30, 2.18, 7.90e11, 72.5, 3.43, None, "NASDAQ", 252.00, 244.00, 299.29, 152.37),
    ("JPM", 195.20, 1.85, 0.96, 5.65e11, 11.2, 17.43, 2.4, "NYSE", 197.00, 193.50, 200.00, 135.00),
    ("UNH", 527.30, 3.45, 0.66, 4.90e11, 22.1, 23.86, 1.3, "NYSE", 530.00, 523.00, 558.10, 445.00),
)

SP500_PROXY_SYMBOL = "SPY"

RESERVED_USERNAMES = frozenset({"admin", "root", "system", "spreads", "official"})

GRID_SIZE = 49
