"""
The `constants` module defines the time constants shared by the index lookups.
"""

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5  # Offset between Julian Date and Modified Julian Date

"""
Hours in one day. Units: *h/day*
"""
HOURS_PER_DAY = 24.0

"""
Length of one Kp/Ap reporting interval. Units: *h*
"""
INTERVAL_HOURS = 3

"""
Number of Kp/Ap reporting intervals in one day.
"""
INTERVALS_PER_DAY = 8
