"""
CCI Calculator
==============
Computes the SEBI CSCRF Cyber Capability Index (CCI) from per-parameter
numerator/denominator values, classifies the result into a maturity tier and
produces detailed, executive and Annexure-K reports.
"""

__version__ = "1.0.0"
__author__ = "CCI Calculator"
