# TTL caching tiers in seconds
HOT_TTL = 60 * 60  # 60 minutes * 60 seconds = 60 minutes
WARM_TTL = 24 * 60 * 60  # 24 hours * 60 minutes * 60 seconds = 24 hours
COOL_TTL = 7 * 24 * 60 * 60  # 7 days * 24 hours * 60 minutes * 60 seconds = 7 days

# Mappings are immutable, so a long TTL never serves a wrong value
DEFAULT_CACHE_TTL = WARM_TTL
