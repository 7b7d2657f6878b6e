"""
Engineering Constants for Load Combinations and the Design Service
"""

# Individual (reaction) combination factors
DEFAULT_REACTION_FACTOR = 1.0
DEFAULT_REACTION_TERM_FACTOR = 1.0

# Text templates for synthesized reaction combinations
REACTION_DESCRIPTION_TEMPLATE = "Individual {load_case} load case for reaction analysis"
REACTION_FACTOR_DESCRIPTION_TEMPLATE = "{load_case} load case factor"

# Load case symbols used in combination equations (e.g. "1.2G + 1.5Q")
LOAD_CASE_SYMBOLS = {
    "Dead": "G",
    "Live": "Q",
    "Snow": "S",
    "Wind": "W",
    "Seismic": "E",
    "Rain": "R",
    "Construction": "C",
    "Temperature": "T",
    "Settlement": "D",
    "Other": "X",
}

# Design service vocabulary
API_LOAD_TYPES_DESIGN = {
    "UDL": "UDL_Vert",
    "Point Load": "PointLoad_Vert",
    "Trapezoidal Load": "Trapezoidal_Vert",
}
API_LOAD_TYPES_ANALYSIS = {
    "UDL": "UDL_Vert",
    "Point Load": "PointLoad_Vert",
    "Trapezoidal Load": "TrapezoidalLoad_Vert",
}
API_FIXITY = {
    "Pinned": [1, 1, 0],
    "Roller": [0, 1, 0],
    "Fixed": [1, 1, 1],
    "Free": [0, 0, 0],
}

# Factor pattern matching tolerance for design-combination classification
FACTOR_TOLERANCE = 0.01

# Unit conversions
GPA_TO_PA = 1e9
MPA_TO_PA = 1e6

# Section defaults sent to the design service (240x90 SG8 timber)
DEFAULT_SECTION = {
    "material": "timber",
    "shape": "rectangular",
    "grade": "SG8",
    "E": 9000.0,        # MPa
    "height": 240,      # mm
    "width": 90,        # mm
    "Ix": 103680000.0,  # mm^4
    "Iy": 14580000.0,   # mm^4
    "Zx": 864000.0,     # mm^3
    "Zy": 324000.0,     # mm^3
    "A": 21600.0,       # mm^2
}

# Design parameter defaults
DEFAULT_DESIGN_PARAMETERS = {
    "countryOfStandard": "New Zealand",
    "materialType": "timber",
    "moistureCondition": "dry",
    "temperatureCondition": "normal",
    "capacityFactor": 0.9,
    "loadingScenario": 1,
    "memberType": "solid timber",
    "memberCount": 1,
    "lateralRestraintSpacing": 1.0,
    "torsionalRestraintSpacing": 1.0,
}
