"""
Shared Kernel

Value objects, clock/time zone helpers and policy configuration used by
every domain app.
"""
