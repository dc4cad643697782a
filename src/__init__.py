"""
Qabum Risk Engine - Merchant Split & Advance Decision Service

A FastAPI-based microservice that splits merchant transactions under a
per-sector ethical cap and decides working-capital advance eligibility.
"""

__version__ = "0.1.0"
