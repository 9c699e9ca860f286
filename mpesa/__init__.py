"""
M-PESA STK Push relay for Django

A small reusable app that sends Lipa na M-PESA Online (STK push) requests
through Safaricom's Daraja API and receives the payment result callbacks.
"""

__version__ = "0.1.0"
