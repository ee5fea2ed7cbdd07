from rest_framework.throttling import UserRateThrottle


class ImportRateThrottle(UserRateThrottle):
    """
    Per-user throttle for bulk accident inserts.

    The rate comes from ``REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['imports']``.
    """

    scope = "imports"
