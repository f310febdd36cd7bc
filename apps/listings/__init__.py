"""Listings app package.

Holds the minimal listing record the booking core depends on: who hosts
it, whether it is approved for reservations, its nightly base price and an
optional per-listing cancellation window. Catalog browsing and the host
onboarding wizard live outside this repository.
"""
