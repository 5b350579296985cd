from skillswap.domain.models import Identity, RatingSummary

__all__ = ["Identity", "RatingSummary"]
