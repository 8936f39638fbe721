"""
Billable Weight Configuration

Volumetric weight uses the industry-standard divisor of 5000 with dimensions
in centimeters and the result in kilograms. Billable weight is always the
greater of actual and volumetric weight (no threshold).
"""

VOLUMETRIC_DIVISOR = 5000

# Unit normalization
GRAMS_PER_KG = 1000
CM_PER_INCH = 2.54

WEIGHT_UNITS = ("kg", "g")
SIZE_UNITS = ("cm", "in", "inch")  # "inch" kept for older callers

# Decimals kept on increment quotients before ceil ((0.8 - 0.5) / 0.1 == 3.0000000000000004)
INCREMENT_PRECISION = 9
