class MetricNames:
    UNKNOWN = "Unknown"
    MSS_NORMAL = "Normal"
    NEWS = "News"
    NO_NEWS = "No News"
    REENTRY = "ReEntry"
    BREAK_EVEN = "Break Even"
    TREND_FOLLOWING = "Trend-following"
    COUNTER_TREND = "Counter-trend"
    LIQUIDATED = "liquidated"
    NOT_LIQUIDATED = "notLiquidated"
    NOT_EVALUATED = "Not Evaluated"

    @staticmethod
    def get_trend_names():
        return [
            MetricNames.TREND_FOLLOWING,
            MetricNames.COUNTER_TREND,
        ] # Only these values get a trend bucket.
