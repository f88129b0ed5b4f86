"""Bookings app package.

Price calculation, booking creation with a payment-gateway order (falling
back to payment on location), payment verification and the host payout
task.
"""
