"""Bookings app package.

This app encapsulates the booking domain: tee-time bookings, slot
occupancy and driving-range sessions. Slot exclusivity is enforced by a
unique index on the occupancy table, so concurrent requests for the same
tee time are adjudicated by the database rather than by a prior read.
"""
