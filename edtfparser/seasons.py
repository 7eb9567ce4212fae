"""
EDTF season codes.

Codes 21-24 are the Level 1 seasons; 25-41 are the Level 2 sub-year
groupings of ISO 8601-2. Each code maps to an inclusive
``(start_month, end_month)`` span; a span whose end month is smaller than its
start month continues into the following year.
"""

LEVEL1_SEASONS = range(21, 25)
LEVEL2_SEASONS = range(21, 42)

DEFAULT_SEASON_MAPPINGS = {
    21: (3, 5),    # Spring
    22: (6, 8),    # Summer
    23: (9, 11),   # Autumn
    24: (12, 2),   # Winter
    25: (3, 5),    # Spring, Northern Hemisphere
    26: (6, 8),    # Summer, Northern Hemisphere
    27: (9, 11),   # Autumn, Northern Hemisphere
    28: (12, 2),   # Winter, Northern Hemisphere
    29: (9, 11),   # Spring, Southern Hemisphere
    30: (12, 2),   # Summer, Southern Hemisphere
    31: (3, 5),    # Autumn, Southern Hemisphere
    32: (6, 8),    # Winter, Southern Hemisphere
    33: (1, 3),    # Quarter 1
    34: (4, 6),    # Quarter 2
    35: (7, 9),    # Quarter 3
    36: (10, 12),  # Quarter 4
    37: (1, 4),    # Quadrimester 1
    38: (5, 8),    # Quadrimester 2
    39: (9, 12),   # Quadrimester 3
    40: (1, 6),    # Semestral 1
    41: (7, 12),   # Semestral 2
}

SEASON_NAMES = {
    21: "Spring",
    22: "Summer",
    23: "Autumn",
    24: "Winter",
    25: "Spring (Northern Hemisphere)",
    26: "Summer (Northern Hemisphere)",
    27: "Autumn (Northern Hemisphere)",
    28: "Winter (Northern Hemisphere)",
    29: "Spring (Southern Hemisphere)",
    30: "Summer (Southern Hemisphere)",
    31: "Autumn (Southern Hemisphere)",
    32: "Winter (Southern Hemisphere)",
    33: "Quarter 1",
    34: "Quarter 2",
    35: "Quarter 3",
    36: "Quarter 4",
    37: "Quadrimester 1",
    38: "Quadrimester 2",
    39: "Quadrimester 3",
    40: "Semestral 1",
    41: "Semestral 2",
}


def season_level(code: int) -> int:
    """Minimum conformance level of a season code (1 or 2)."""
    if code in LEVEL1_SEASONS:
        return 1
    if code in LEVEL2_SEASONS:
        return 2
    raise ValueError(f"Invalid season code: {code}")
