"""Outgoing e-mail and SMS notifications for accounts and bookings."""
