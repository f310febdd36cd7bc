"""Bookings app package.

This app encapsulates the booking lifecycle: creation, payment
confirmation, cancellation, completion and the periodic sweeps that expire
unpaid holds. Every status change is a conditional update on the booking
row, and creation/confirmation serialize on the listing row so that two
confirmed bookings never overlap.
"""
