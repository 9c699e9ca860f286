"""
Signals for M-PESA events.
"""
from django.dispatch import Signal

# Signal sent when an STK push attempt reaches a terminal outcome
# Provides arguments:
# - request: The PaymentRequest
# - result: The PaymentResult
stk_push_completed = Signal()

# Signal sent when Daraja posts a payment result callback
# Provides arguments:
# - payload: The callback body, unparsed
callback_received = Signal()
