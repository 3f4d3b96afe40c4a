# backend.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
# (les variables déjà présentes dans l'environnement restent prioritaires)
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

PUBLIC_DIR = BASE_DIR / "public"

"""
Configuration centrale du backend.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose le chemin des assets de la boutique (PUBLIC_DIR)
- Normalise et expose les clés/URLs PagoPar, sécurité cookies, CORS/hosts
- Paramètres du checkout (expiration du paiement)
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _int_env(name: str, default: int) -> int:
    raw = _clean_env(os.getenv(name) or "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default

# PagoPar: clés publique/privée (obligatoires au démarrage) et endpoint
PAGOPAR_PUBLIC_KEY = _clean_env(os.getenv("PAGOPAR_PUBLIC_KEY") or "")
PAGOPAR_PRIVATE_KEY = _clean_env(os.getenv("PAGOPAR_PRIVATE_KEY") or "")
PAGOPAR_API_URL = _clean_env(os.getenv("PAGOPAR_API_URL") or "https://api.pagopar.com/api")
PAGOPAR_API_VERSION = _clean_env(os.getenv("PAGOPAR_API_VERSION") or "1.2")
PAGOPAR_TIMEOUT_MS = _int_env("PAGOPAR_TIMEOUT_MS", 10000)

# Normalisations utiles
if PAGOPAR_API_URL and not PAGOPAR_API_URL.startswith("http"):
    PAGOPAR_API_URL = "https://" + PAGOPAR_API_URL
if PAGOPAR_API_URL.endswith("/"):
    PAGOPAR_API_URL = PAGOPAR_API_URL.rstrip("/")

# Checkout: délai maximal de paiement (heures) et type de commande envoyé à PagoPar
CHECKOUT_EXPIRY_HOURS = _int_env("CHECKOUT_EXPIRY_HOURS", 24)
CHECKOUT_ORDER_TYPE = _clean_env(os.getenv("CHECKOUT_ORDER_TYPE") or "venta_productos")

# Cookies / session (le panier vit dans la session signée)
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")
SESSION_SECRET_KEY = _clean_env(os.getenv("SESSION_SECRET_KEY") or "replace_me_with_a_long_random_secret")

# CORS (dev)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

BASE_URL = _clean_env(os.getenv("BASE_URL") or "http://localhost:8000")
