"""Payments package.

Client for the Razorpay payment gateway used to collect booking payments
and route payouts to hosts' linked accounts.
"""
