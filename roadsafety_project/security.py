from django.utils.deprecation import MiddlewareMixin


class SecurityHeadersMiddleware(MiddlewareMixin):
    """Attach OWASP-aligned security headers to every API response.

    Complements Django's SecurityMiddleware. The API serves JSON only, so
    the CSP forbids everything except same-origin connections.
    """

    def process_response(self, request, response):  # noqa: D401
        response.setdefault("X-Content-Type-Options", "nosniff")
        response.setdefault("X-Frame-Options", "DENY")
        response.setdefault("Referrer-Policy", "same-origin")
        response.setdefault("Cross-Origin-Opener-Policy", "same-origin")
        if not request.path.startswith("/admin/"):
            response.setdefault(
                "Content-Security-Policy",
                "default-src 'none'; connect-src 'self'; frame-ancestors 'none'",
            )
        return response
