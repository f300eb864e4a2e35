"""Finances app package.

This app contains payments for tee-time and range bookings and their
transaction history. Integration with a real payment gateway would
replace the confirmation stub in ``services.confirm_payment``.
"""
