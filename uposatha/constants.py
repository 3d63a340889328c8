"""Name tables shared by the ephemeris provider, resolver and view-models."""
from __future__ import annotations

# 0-indexed tithis; 14 = Purnima, 29 = Amavasya
TITHI_NAMES = [
    "Pratipada", "Dwitiya", "Tritiya", "Chaturthi", "Panchami",
    "Shashthi", "Saptami", "Ashtami", "Navami", "Dashami",
    "Ekadashi", "Dwadashi", "Trayodashi", "Chaturdashi", "Purnima",
    "Pratipada", "Dwitiya", "Tritiya", "Chaturthi", "Panchami",
    "Shashthi", "Saptami", "Ashtami", "Navami", "Dashami",
    "Ekadashi", "Dwadashi", "Trayodashi", "Chaturdashi", "Amavasya",
]

# Amanta months, 0 => Chaitra
MASA_NAMES = ["Chaitra", "Vaishakha", "Jyeshtha", "Ashadha", "Shravana", "Bhadrapada",
              "Ashvina", "Kartika", "Margashirsha", "Pausha", "Magha", "Phalguna"]

NAKSHATRA_NAMES = [
    "Ashwini", "Bharani", "Krittika", "Rohini", "Mrigashira", "Ardra",
    "Punarvasu", "Pushya", "Ashlesha", "Magha", "Purva Phalguni", "Uttara Phalguni",
    "Hasta", "Chitra", "Swati", "Vishakha", "Anuradha", "Jyeshtha",
    "Mula", "Purva Ashadha", "Uttara Ashadha", "Shravana", "Dhanishta", "Shatabhisha",
    "Purva Bhadrapada", "Uttara Bhadrapada", "Revati",
]

YOGA_NAMES = [
    "Vishkambha", "Priti", "Ayushman", "Saubhagya", "Shobhana", "Atiganda",
    "Sukarma", "Dhriti", "Shula", "Ganda", "Vriddhi", "Dhruva",
    "Vyaghata", "Harshana", "Vajra", "Siddhi", "Vyatipata", "Variyan",
    "Parigha", "Shiva", "Siddha", "Sadhya", "Shubha", "Shukla",
    "Brahma", "Indra", "Vaidhriti",
]

# Karana index 0..59 over a lunar month (half-tithis)
_MOVABLE_KARANAS = ["Bava", "Balava", "Kaulava", "Taitila", "Garaja", "Vanija", "Vishti"]


def karana_name(index: int) -> str:
    if index == 0:
        return "Kimstughna"
    if index >= 57:
        return ["Shakuni", "Chatushpada", "Naga"][index - 57]
    return _MOVABLE_KARANAS[(index - 1) % 7]


KARANA_NAMES = [karana_name(i) for i in range(60)]

# vara: 0 = Sunday
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
SANSKRIT_WEEKDAYS = ["Ravivara", "Somavara", "Mangalavara", "Budhavara",
                     "Guruvara", "Shukravara", "Shanivara"]

RASHI_NAMES = ["Aries", "Taurus", "Gemini", "Cancer", "Leo", "Virgo",
               "Libra", "Scorpio", "Sagittarius", "Capricorn", "Aquarius", "Pisces"]
RASHI_SYMBOLS = ["♈", "♉", "♊", "♋", "♌", "♍", "♎", "♏", "♐", "♑", "♒", "♓"]

PAKSHA_SHUKLA = "Shukla"
PAKSHA_KRISHNA = "Krishna"


def paksha_for_tithi(index: int) -> str:
    return PAKSHA_SHUKLA if 0 <= index <= 14 else PAKSHA_KRISHNA


# ---------------- Uposatha tithis ----------------
FULL_MOON = 14
NEW_MOON = 29
ASHTAMI = {7, 22}
CHATURDASHI = {13, 28}
UPOSATHA_TITHIS = {7, 13, 14, 22, 28, 29}

ASHVINA = 6
DASHAMI = 9
VIJAYADASHAMI_FLAG = "Vijayadashami"

PALI_LABELS = {
    7: "Sukka Aṭṭhamī",
    13: "Sukka Cātuddasī",
    14: "Puṇṇamī (Pūrṇimā)",
    22: "Kanhā Aṭṭhamī",
    28: "Kanhā Cātuddasī",
    29: "Amāvāsī (Amāvasyā)",
}

UPOSATHA_TYPE = {
    7: "8th Day Uposatha",
    13: "14th Day Uposatha",
    14: "Full Moon Uposatha",
    22: "8th Day Uposatha",
    28: "14th Day Uposatha",
    29: "New Moon Uposatha",
}

# ---------------- Grahas ----------------
GRAHA_KEYS = ["sun", "moon", "mars", "mercury", "jupiter", "venus", "saturn", "rahu", "ketu"]

PLANET_META = {
    "sun": ("Sun", "Sūrya", "☉"),
    "moon": ("Moon", "Chandra", "☽"),
    "mars": ("Mars", "Maṅgala", "♂"),
    "mercury": ("Mercury", "Budha", "☿"),
    "jupiter": ("Jupiter", "Guru", "♃"),
    "venus": ("Venus", "Śukra", "♀"),
    "saturn": ("Saturn", "Śani", "♄"),
    "rahu": ("Rahu", "Rāhu", "☊"),
    "ketu": ("Ketu", "Ketu", "☋"),
}

# (exaltation rashi, debilitation rashi, own rashis)
DIGNITY_TABLE = {
    "sun": (0, 6, {4}),
    "moon": (1, 7, {3}),
    "mars": (9, 3, {0, 7}),
    "mercury": (5, 11, {2, 5}),
    "jupiter": (3, 9, {8, 11}),
    "venus": (11, 5, {1, 6}),
    "saturn": (6, 0, {9, 10}),
    "rahu": (1, 7, set()),
    "ketu": (7, 1, set()),
}


def dignity_for(key: str, rashi: int) -> str:
    if key not in DIGNITY_TABLE:
        return "neutral"
    exalt, debil, own = DIGNITY_TABLE[key]
    if rashi == exalt:
        return "exalted"
    if rashi == debil:
        return "debilitated"
    if rashi in own:
        return "own"
    return "neutral"
