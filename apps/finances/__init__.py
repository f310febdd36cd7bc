"""Finances app package.

This app holds payment records reported by the payment processor, the
payouts made to hosts, and the settlement engine that decides when and
how much of a stay's total becomes payable to its host.
"""
