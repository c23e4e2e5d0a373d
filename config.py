"""Configuration constants for the airport dataset pipeline."""

# Ollama (local, default)
DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "mistral:latest"
OLLAMA_FALLBACK_MODELS = ["llama2"]
OLLAMA_OPTIONS = {"temperature": 0.1, "top_p": 0.9}
OLLAMA_TIMEOUT = 120

# OpenAI
DEFAULT_MODEL = "gpt-4o-mini"
FALLBACK_MODELS = ["gpt-4o", "gpt-4.1"]

# Gemini
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
GEMINI_FALLBACK_MODELS = ["gemini-1.5-pro"]

PROVIDER_DEFAULTS = {
    "ollama": {"model": DEFAULT_OLLAMA_MODEL, "fallbacks": OLLAMA_FALLBACK_MODELS},
    "openai": {"model": DEFAULT_MODEL, "fallbacks": FALLBACK_MODELS},
    "gemini": {"model": DEFAULT_GEMINI_MODEL, "fallbacks": GEMINI_FALLBACK_MODELS},
}
DEFAULT_PROVIDER = "ollama"
LLM_TEMPERATURE = 0.1

CHECKPOINT_FILE = "pipeline_checkpoint.json"

# Pipeline files, in stage order
COUNTRIES_JSON = "countries.json"
CITIES_JSON = "beautiful-cities.json"
CITIES_CLEANED_JSON = "beautiful-cities-cleaned.json"
CITIES_BACKUP_JSON = "beautiful-cities-backup.json"
AIRPORTS_FOUND_JSON = "airports-found.json"
AIRPORTS_SUMMARY_JSON = "airports-summary.json"
AIRPORTS_FLAT_JSON = "airports-flat.json"
AIRPORTS_FLAT_SUMMARY_JSON = "airports-flat-summary.json"
AIRPORTS_CATEGORIZED_JSON = "airports-categorized.json"
AIRPORTS_BY_CATEGORY_JSON = "airports-by-category.json"
AIRPORTS_WITH_ICAO_JSON = "airports-with-icao.json"
ICAO_SUMMARY_JSON = "icao-enrichment-summary.json"
AIRPORTS_CORRECTED_JSON = "airports-with-icao-corrected.json"
CORRECTIONS_JSON = "corrections-made.json"
CORRECTION_SUMMARY_JSON = "correction-summary.json"
CORRECTIONS_REPORT_HTML = "corrections-report.html"
AIRPORTS_VALIDATED_JSON = "airports-validated.json"
SUSPICIOUS_ICAO_JSON = "suspicious-icao-codes.json"

OPENFLIGHTS_ALL_JSON = "openflights-all.json"
OPENFLIGHTS_WITH_CODES_JSON = "openflights-with-codes.json"
OPENFLIGHTS_AIRPORTS_JSON = "openflights-airports-only.json"
OPENFLIGHTS_LOOKUP_JSON = "iata-to-icao-lookup.json"
OPENFLIGHTS_SUMMARY_JSON = "openflights-summary.json"

OPENFLIGHTS_URL = "https://raw.githubusercontent.com/jpatokal/openflights/master/data/airports.dat"
OPENFLIGHTS_EXTENDED_URL = "https://raw.githubusercontent.com/jpatokal/openflights/master/data/airports-extended.dat"
HTTP_TIMEOUT = 60

WIKIPEDIA_API = "https://en.wikipedia.org/w/api.php"
USER_AGENT = "world-airports-dataset/0.1 (offline dataset builder)"

# Seconds between outbound requests
CITIES_DELAY = 1.5
FIND_AIRPORTS_DELAY = 1.0
CATEGORIZE_DELAY = 1.0
ICAO_LLM_DELAY = 0.5
WIKIPEDIA_DELAY = 1.0
WIKIPEDIA_PAGE_DELAY = 0.3
WIKIPEDIA_QUERY_DELAY = 0.5

# Partial-name matching thresholds
PARTIAL_MATCH_MIN_LENGTH = 4
PARTIAL_MATCH_MIN_TOKEN_LENGTH = 3
PARTIAL_MATCH_MAX_REQUIRED_OVERLAP = 2

# Runway categories, meters
RUNWAY_MIN_PLAUSIBLE = 100
RUNWAY_MAX_PLAUSIBLE = 6000
FEET_PER_METER = 3.28084
RUNWAY_CRITERIA = {
    "small": {"max_length": 800, "description": "Light GA aircraft, private strips"},
    "medium": {"min_length": 800, "max_length": 1800, "description": "Regional/turboprop, small jet operations"},
    "large": {"min_length": 1800, "description": "Commercial jets, wide-body, international"},
}

# Verified fixes that override every other ICAO source
MANUAL_ICAO_CORRECTIONS = {
    "KVP": {"icao": "LUTR", "name": "Tiraspol Airfield"},
    "KIV": {"icao": "LUKK", "name": "Chișinău International Airport"},
    "BNA": {"icao": "DABC", "name": "Mohamed Boudiaf International Airport", "note": "Constantine, Algeria (not Nashville!)"},
}

# Re-applied by the validation pass
VALIDATION_ICAO_CORRECTIONS = {"KVP": "LUTR", "KIV": "LUKK"}

KNOWN_ICAO_MAPPINGS = {
    # Major international airports
    "LAX": "KLAX", "JFK": "KJFK", "LHR": "EGLL", "CDG": "LFPG",
    "NRT": "RJAA", "HND": "RJTT", "DXB": "OMDB", "SIN": "WSSS",
    "HKG": "VHHH", "ICN": "RKSI", "TPE": "RCTP", "KUL": "WMKK",
    "BKK": "VTBS", "CGK": "WIII", "DEL": "VIDP", "BOM": "VABB",
    "SYD": "YSSY", "MEL": "YMML", "PER": "YPPH", "YYZ": "CYYZ",
    "YVR": "CYVR", "GRU": "SBGR", "EZE": "SAEZ", "GIG": "SBGL",
    "LIM": "SPJC", "BOG": "SKBO", "PTY": "MPTO", "CUN": "MMUN",
    "AMS": "EHAM", "FRA": "EDDF", "MUC": "EDDM", "ZRH": "LSZH",
    "VIE": "LOWW", "ARN": "ESSA", "CPH": "EKCH", "OSL": "ENGM",
    "HEL": "EFHK", "LED": "ULLI", "SVO": "UUEE", "DME": "UUDD",
    "IST": "LTFM", "SAW": "LTFJ", "CAI": "HECA", "JNB": "FAOR",
    "CPT": "FACT", "DUR": "FALE", "ADD": "HAAB", "NBO": "HKJK",
    "LAD": "FNLU", "CAS": "GMMN", "TUN": "DTTA", "ALG": "DAAG",
    # Asia-Pacific
    "PEK": "ZBAA", "PVG": "ZSPD", "CAN": "ZGGG", "CTU": "ZUUU",
    "KMG": "ZPPP", "XIY": "ZLXY", "URC": "ZWWW", "TSN": "ZBTJ",
    "CGO": "ZHCC", "WUH": "ZHHH", "CKG": "ZUCK", "KWE": "ZUGY",
    "SZX": "ZGSZ", "XMN": "ZSAM", "FOC": "ZSFZ", "TAO": "ZSQD",
    "NKG": "ZSNJ", "NNG": "ZGNN", "HAK": "ZJHK", "SYX": "ZJSY",
    # Europe
    "MAD": "LEMD", "BCN": "LEBL", "LIS": "LPPT", "OPO": "LPPR",
    "FCO": "LIRF", "MXP": "LIMC", "LIN": "LIML", "VCE": "LIPZ",
    "ATH": "LGAV", "SKG": "LGTS", "BUD": "LHBP", "PRG": "LKPR",
    "WAW": "EPWA", "KRK": "EPKK", "BRU": "EBBR", "LUX": "ELLX",
}

# ICAO prefix -> regions it is expected in
ICAO_REGION_PREFIXES = {
    "LU": ["Moldova"],
    "UL": ["Russia", "Kazakhstan", "Uzbekistan"],
    "EG": ["United Kingdom"],
    "LF": ["France"],
    "ED": ["Germany"],
    "LE": ["Spain"],
    "LI": ["Italy"],
    "WM": ["Malaysia"],
    "WS": ["Singapore"],
    "VT": ["Thailand"],
    "VI": ["India"],
    "ZB": ["China"],
    "ZS": ["China"],
    "RJ": ["Japan"],
    "RK": ["South Korea"],
    "OM": ["United Arab Emirates", "UAE"],
    "OT": ["Qatar"],
    "K": ["United States"],
    "C": ["Canada"],
    "S": ["South America", "Brazil", "Argentina", "Chile", "Peru", "Colombia"],
    "F": ["Africa", "South Africa", "Angola", "Mauritius"],
    "Y": ["Australia"],
    "N": ["Pacific islands", "New Zealand", "Fiji"],
}

SOURCES = ["manual", "known", "openflights", "wikipedia", "llm"]

WIKIPEDIA_AIRPORT_KEYWORDS = (
    "airport", "international airport", "air base", "airfield", "airstrip",
    "aerodrome", "aéroport", "flughafen", "aeroporto",
)

PROMPTS = {
    "cities": """List up to 10 beautiful or famous cities in {country}. Return the result as a comma-separated list. Be very concise. Reply with the cities names, nothing else. If you have a problem finding the country or cities, just reply with the word null.""",

    "airport": """Does the city "{city}" in "{country}" have a commercial airport? If yes, provide the airport information in this exact JSON format:

{{
  "hasAirport": true,
  "airportCode": "XXX",
  "airportName": "Full Airport Name",
  "city": "{city}",
  "country": "{country}"
}}

If no commercial airport exists, respond with:
{{
  "hasAirport": false
}}

Only respond with valid JSON. Be factual and accurate. If uncertain, respond with hasAirport: false.""",

    "runway": """What is the longest runway length at {airport_name} ({airport_code}) in {city}, {country}?

Respond with ONLY the runway length in meters in this exact JSON format:
{{
  "runwayLengthMeters": 1234,
  "confidence": "high"
}}

If you're not certain about the exact length, use "confidence": "low". If no data available, use "runwayLengthMeters": null.
Only respond with valid JSON, nothing else.""",

    "icao": """What is the ICAO code for {airport_name} ({airport_code}) in {city}, {country}?

ICAO codes are exactly 4 letters (like KJFK, EGLL, LFPG). Respond with ONLY the ICAO code in this exact JSON format:

{{
  "icaoCode": "XXXX"
}}

If you don't know the exact ICAO code, respond with:
{{
  "icaoCode": null
}}

Only respond with valid JSON, nothing else.""",
}
