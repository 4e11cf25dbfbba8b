class UnsupportedExchangeError(Exception):
    pass


class UnsupportedTickerStreamError(Exception):
    pass


class DataFetchError(Exception):
    pass
