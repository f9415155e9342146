"""
Middlewares transverses de l'application.
- register_basic_middlewares: CORS et TrustedHost
- register_security_middleware: en-têtes de sécurité et CSP
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware

from rewear.config import ALLOWED_HOSTS, COOKIE_SECURE, CORS_ORIGINS, SUPABASE_URL

RAZORPAY_CHECKOUT = "https://checkout.razorpay.com"

def register_basic_middlewares(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=ALLOWED_HOSTS + ["*"] if "*" in CORS_ORIGINS else ALLOWED_HOSTS,
    )

def register_security_middleware(app: FastAPI) -> None:
    """
    En-têtes: X-Frame-Options, X-Content-Type-Options, Referrer-Policy, HSTS (si secure).
    CSP: autorise Supabase (connect/img) et le widget Razorpay (script/frame).
    """
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Permissions-Policy", "geolocation=(), microphone=(), camera=()")
        if COOKIE_SECURE:
            response.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains; preload")

        supabase = SUPABASE_URL.rstrip("/") if SUPABASE_URL else ""
        swagger_cdns = ["https://cdn.jsdelivr.net", "https://unpkg.com"]
        csp_connect = ["'self'", RAZORPAY_CHECKOUT, "https://api.razorpay.com"] + ([supabase] if supabase else [])
        csp = (
            "default-src 'self'; "
            "base-uri 'self'; object-src 'none'; "
            f"img-src 'self' data: blob: https://images.unsplash.com {supabase}; "
            f"style-src 'self' 'unsafe-inline' {' '.join(swagger_cdns)}; "
            f"script-src 'self' 'unsafe-inline' {RAZORPAY_CHECKOUT} {' '.join(swagger_cdns)}; "
            f"frame-src {RAZORPAY_CHECKOUT} https://api.razorpay.com; "
            f"connect-src {' '.join(csp_connect)}"
        )
        response.headers["Content-Security-Policy"] = csp
        return response
