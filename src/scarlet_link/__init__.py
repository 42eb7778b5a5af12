"""
Scarlet Link - localization backend for the donor/patient/volunteer dashboard
"""

__version__ = "1.0.0"
