"""
Zone Configuration

Metro cities and North-East states used by the zone resolver. Comparisons
are made on stripped, lowercased names.
"""

METRO_CITIES = [
    "Mumbai",
    "Delhi",
    "Bangalore",
    "Chennai",
    "Kolkata",
    "Hyderabad",
    "Pune",
    "Ahmedabad",
    "Surat",
    "Jaipur",
    "Lucknow",
    "Kanpur",
    "Nagpur",
    "Indore",
    "Thane",
    "Bhopal",
    "Visakhapatnam",
    "Pimpri-Chinchwad",
]

NORTH_EAST_STATES = [
    "Arunachal Pradesh",
    "Assam",
    "Manipur",
    "Meghalaya",
    "Mizoram",
    "Nagaland",
    "Sikkim",
    "Tripura",
]

PINCODE_LENGTH = 6


def normalize_name(name: str) -> str:
    """Normalize a city or state name for comparison."""
    return " ".join(name.split()).lower()


METRO_CITY_KEYS = frozenset(normalize_name(c) for c in METRO_CITIES)
NORTH_EAST_STATE_KEYS = frozenset(normalize_name(s) for s in NORTH_EAST_STATES)
