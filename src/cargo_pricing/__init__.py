"""
Cargo Pricing Package

Booking pricing and delivery estimation for air-freight shipments.
Resolves a quote using Destination → Billable Weight → Cost pipeline and
estimates delivery dates in business days.
"""

__version__ = "1.0.0"
