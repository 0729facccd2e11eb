"""
Métriques Prometheus du service de contexte cosmique.

Compteurs et latences des calculs de thèmes, exposés via le registre par défaut de
`prometheus_client` (l'exposition HTTP relève de l'application hôte).
"""

from prometheus_client import Counter, Histogram

CHARTS_COMPUTED = Counter(
    "cosmic_charts_computed_total",
    "Natal charts computed by the astro engine",
    ["precision"],
)
CHART_CACHE_HITS = Counter(
    "cosmic_chart_cache_hits_total",
    "Natal charts served from the chart repository",
)
CHART_COMPUTE_SECONDS = Histogram(
    "cosmic_chart_compute_seconds",
    "Latency of natal chart computations",
    ["precision"],
)
