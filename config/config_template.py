CONFIGURATION_TEMPLATE = {
    "baseCurrency": "BTCF0",
    "quoteCurrency": "USTF0",
    "centralPrice": 29000,
    "amountAsQuote": 2.0,
    "upperLevelsCount": 20,
    "downLevelsCount": 20,
    "interLevelsDelta": 200,
}

REQUIRED_KEYS = tuple(CONFIGURATION_TEMPLATE.keys())

DEFAULT_EXCHANGE = "bitfinex"
DEFAULT_EXCHANGE_OPTIONS = {"newUpdates": False}

# Upper bound on upperLevelsCount + downLevelsCount + 1, guards against typos in the counts.
MAX_TOTAL_LEVELS = 5000
