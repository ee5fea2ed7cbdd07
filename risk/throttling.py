# risk/throttling.py

from rest_framework.throttling import UserRateThrottle


class BurstRateThrottle(UserRateThrottle):
    """
    Per-user 'burst' throttle for the risk analytics endpoints.

    Every analytics request recomputes scores over the full record snapshot,
    so the rate is kept modest. Controlled by:
        REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['burst']
    """

    scope = "burst"
