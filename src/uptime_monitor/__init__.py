"""
Website uptime monitoring: periodic HTTP probes, result recording and
up/down transition notifications by email and SMS.
"""

__version__ = "1.0.0"
