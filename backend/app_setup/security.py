"""
En-têtes de sécurité et CSP de la boutique.
- Pas de CSRF: aucune session authentifiée, le cookie de session ne porte que le panier.
- Vitrine: tout vient de 'self'. Le navigateur n'appelle jamais l'API PagoPar,
  la redirection vers url_pago est une navigation (non soumise à CSP).
- /docs et /redoc: Swagger UI / ReDoc chargés depuis cdn.jsdelivr.net avec un script inline.
"""
from fastapi import FastAPI
from backend.config import COOKIE_SECURE

DOCS_PATHS = ("/docs", "/redoc")
DOCS_CDN = "https://cdn.jsdelivr.net"

BASE_CSP = "default-src 'self'; base-uri 'self'; object-src 'none'; frame-ancestors 'none'; form-action 'self'"

STORE_CSP = (
    f"{BASE_CSP}; "
    "img-src 'self' data:; style-src 'self'; script-src 'self'; connect-src 'self'"
)

DOCS_CSP = (
    f"{BASE_CSP}; "
    "img-src 'self' data: https://fastapi.tiangolo.com; "
    f"style-src 'self' 'unsafe-inline' {DOCS_CDN} https://fonts.googleapis.com; "
    "font-src 'self' https://fonts.gstatic.com; "
    f"script-src 'self' 'unsafe-inline' {DOCS_CDN}; "
    "worker-src 'self' blob:; connect-src 'self'"
)

def content_security_policy(path: str) -> str:
    return DOCS_CSP if path.startswith(DOCS_PATHS) else STORE_CSP

def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)

        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Permissions-Policy", "geolocation=(), microphone=(), camera=()")
        if COOKIE_SECURE:
            response.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains; preload")

        response.headers.setdefault("Content-Security-Policy", content_security_policy(request.url.path))
        return response
