"""
STK Gateway - Mobile-Money Payment Initiation Service

A FastAPI-based microservice that sends STK push charges to M-Pesa
subscribers through PayHero and waits for the payment to resolve.
"""

__version__ = "0.1.0"
