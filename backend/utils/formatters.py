from typing import Any

# module backend.utils.formatters
def format_pyg(amount: Any) -> str:
    """
    Formate un montant en guaraníes comme Intl.NumberFormat('es-PY', PYG):
    100000 -> "Gs. 100.000" (pas de décimales, séparateur de milliers ".").
    """
    try:
        value = int(round(float(amount or 0)))
    except (TypeError, ValueError):
        value = 0
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,}".replace(",", ".")
    return f"{sign}Gs. {grouped}"
