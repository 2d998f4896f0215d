"""
SevaConnect backend core.

Society service marketplace: global catalogue with per-society offerings,
OTP-confirmed booking lifecycle, booking chat and maid reviews.
"""

__version__ = "2.0.0"
