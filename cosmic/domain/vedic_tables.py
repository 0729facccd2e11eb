"""
Vocabulaire fixe de l'astrologie védique.

L'ordre des listes fait partie des données: l'index d'un rashi, d'un nakshatra, d'un tithi ou
d'un yoga est calculé à partir de la longitude, puis converti en nom via ces tables.
"""

RASHIS = (
    "Aries", "Taurus", "Gemini", "Cancer", "Leo", "Virgo",
    "Libra", "Scorpio", "Sagittarius", "Capricorn", "Aquarius", "Pisces",
)

NAKSHATRAS = (
    "Ashwini", "Bharani", "Krittika", "Rohini", "Mrigashira", "Ardra",
    "Punarvasu", "Pushya", "Ashlesha", "Magha", "Purva Phalguni", "Uttara Phalguni",
    "Hasta", "Chitra", "Swati", "Vishakha", "Anuradha", "Jyeshtha",
    "Mula", "Purva Ashadha", "Uttara Ashadha", "Shravana", "Dhanishta", "Shatabhisha",
    "Purva Bhadrapada", "Uttara Bhadrapada", "Revati",
)

# Les quinzaines croissante (Shukla) et décroissante (Krishna) partagent leurs noms,
# seule la dernière entrée de chaque moitié diffère (Purnima / Amavasya).
TITHIS = (
    "Pratipada", "Dwitiya", "Tritiya", "Chaturthi", "Panchami",
    "Shashthi", "Saptami", "Ashtami", "Navami", "Dashami",
    "Ekadashi", "Dwadashi", "Trayodashi", "Chaturdashi", "Purnima",
    "Pratipada", "Dwitiya", "Tritiya", "Chaturthi", "Panchami",
    "Shashthi", "Saptami", "Ashtami", "Navami", "Dashami",
    "Ekadashi", "Dwadashi", "Trayodashi", "Chaturdashi", "Amavasya",
)

PAKSHAS = ("Shukla", "Krishna")

YOGAS = (
    "Vishkumbha", "Priti", "Ayushman", "Saubhagya", "Shobhana", "Atiganda",
    "Sukarman", "Dhriti", "Shula", "Ganda", "Vriddhi", "Dhruva",
    "Vyaghata", "Harshana", "Vajra", "Siddhi", "Vyatipata", "Variyan",
    "Parigha", "Shiva", "Siddha", "Sadhya", "Shubha", "Shukla",
    "Brahma", "Indra", "Vaidhriti",
)

# Octants de 45° de l'élongation Lune - Soleil
LUNAR_PHASES = (
    "New Moon", "Waxing Crescent", "First Quarter", "Waxing Gibbous",
    "Full Moon", "Waning Gibbous", "Last Quarter", "Waning Crescent",
)

# Maître (graha) de chaque signe, dans l'ordre de RASHIS
RASHI_LORDS = (
    "Mars", "Venus", "Mercury", "Moon", "Sun", "Mercury",
    "Venus", "Mars", "Jupiter", "Saturn", "Saturn", "Jupiter",
)

# Maîtres Vimshottari: cycle de 9 répété trois fois sur les 27 nakshatras
VIMSHOTTARI_LORDS = (
    "Ketu", "Venus", "Sun", "Moon", "Mars", "Rahu", "Jupiter", "Saturn", "Mercury",
)

RASHI_ELEMENTS = (
    "fire", "earth", "air", "water",
    "fire", "earth", "air", "water",
    "fire", "earth", "air", "water",
)

PLANET_ELEMENTS = {
    "Sun": "fire",
    "Moon": "water",
    "Mars": "fire",
    "Mercury": "earth",
    "Jupiter": "ether",
    "Venus": "water",
    "Saturn": "air",
}

DOSHA_ELEMENTS = {
    "vata": ("air", "ether"),
    "pitta": ("fire",),
    "kapha": ("earth", "water"),
}
