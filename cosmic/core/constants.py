"""Constantes astronomiques partagées par le moteur et le domaine."""

# Époque J2000.0 (2000-01-01 12:00 TT) et siècle julien
J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0

FULL_CIRCLE = 360.0
RASHI_SPAN = 30.0
NAKSHATRA_SPAN = FULL_CIRCLE / 27
PADA_SPAN = NAKSHATRA_SPAN / 4
TITHI_SPAN = 12.0
PHASE_BUCKET_SPAN = 45.0

# Ayanamsa de Lahiri à J2000 et taux de précession (50.2882"/an, exprimé par siècle)
AYANAMSA_J2000 = 23.85
LAHIRI_RATE_PER_CENTURY = 50.2882 * 100 / 3600.0

# Nombre de termes de la série lunaire retenus en précision "fast"
FAST_MOON_TERMS = 13

# Pas (en jours) utilisé pour détecter le mouvement rétrograde
RETROGRADE_STEP_DAYS = 0.5

# Répartition neutre des doshas quand les planètes manquent (vata, pitta, kapha)
NEUTRAL_DOSHA_SPLIT = (33, 33, 34)
