# rewear.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Chemin du projet puis chargement explicite du .env racine
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

PUBLIC_DIR = BASE_DIR / "public"

"""
Configuration centrale de ReWear.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les URLs/clés Supabase et Razorpay
- Expose la politique de prix du panier, les frais optionnels et les réglages du chat
- Sécurité cookies, CORS/hosts, stockage des sessions d'auth
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces, guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _float_env(name: str, default: float) -> float:
    try:
        return float(_clean_env(os.getenv(name, "")) or default)
    except ValueError:
        return default

# Supabase: URL et clés (anon/service)
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or os.getenv("NEXT_PUBLIC_SUPABASE_URL") or "")
SUPABASE_ANON = _clean_env(os.getenv("SUPABASE_ANON_KEY") or os.getenv("SUPABASE_KEY") or "")
SUPABASE_SERVICE_KEY = _clean_env(os.getenv("SUPABASE_SERVICE_KEY") or "")

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

# Buckets de stockage (images produits, avatars)
PRODUCT_IMAGES_BUCKET = os.getenv("PRODUCT_IMAGES_BUCKET", "product-images")
AVATARS_BUCKET = os.getenv("AVATARS_BUCKET", "profiles")

# Razorpay: l'ancien nommage RAZORPAY_API_* reste accepté
RAZORPAY_KEY_ID = _clean_env(os.getenv("RAZORPAY_KEY_ID") or os.getenv("RAZORPAY_API_KEY") or "")
RAZORPAY_KEY_SECRET = _clean_env(os.getenv("RAZORPAY_KEY_SECRET") or os.getenv("RAZORPAY_API_SECRET") or "")
RAZORPAY_API_URL = _clean_env(os.getenv("RAZORPAY_API_URL") or "https://api.razorpay.com/v1").rstrip("/")
PAYMENT_CURRENCY = _clean_env(os.getenv("PAYMENT_CURRENCY") or "INR").upper()
# Nom affiché dans le widget de paiement
PAYMENT_MERCHANT_NAME = os.getenv("PAYMENT_MERCHANT_NAME", "ReWear")

# Panier: "per_day" (prix × jours de location) ou "flat" (prix seul)
CART_PRICING_POLICY = _clean_env(os.getenv("CART_PRICING_POLICY") or "per_day").lower()
DELIVERY_FEE = _float_env("DELIVERY_FEE", 0.0)
SERVICE_FEE_RATE = _float_env("SERVICE_FEE_RATE", 0.0)

# Chat propriétaire (réponse simulée)
CHAT_REPLY_DELAY_SECONDS = _float_env("CHAT_REPLY_DELAY_SECONDS", 1.0)
CHAT_MAX_TRANSCRIPTS = int(_float_env("CHAT_MAX_TRANSCRIPTS", 1000))

# Sessions d'auth persistées: préfixe des clés et backend (Redis si URL fournie)
AUTH_STORAGE_PREFIX = os.getenv("AUTH_STORAGE_PREFIX", "sb-rewear-")
SESSION_STORE_URL = _clean_env(os.getenv("SESSION_STORE_URL") or "")
# Durée de conservation quand la session ne fournit pas expires_at
SESSION_TTL_SECONDS = int(_float_env("SESSION_TTL_SECONDS", 3600))

# Cookies / CORS / hosts
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

# Redirection après confirmation d'email
SIGNUP_REDIRECT_URL = os.getenv("SIGNUP_REDIRECT_URL", "http://localhost:8000/")
