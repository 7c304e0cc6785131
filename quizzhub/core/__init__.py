from .stream import LatestValueStream, Subscription

__all__ = ["LatestValueStream", "Subscription"]
