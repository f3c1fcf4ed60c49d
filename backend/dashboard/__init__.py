"""
Business dashboard backend.

Admin management of employees and clients, employee work sessions,
daily task logging, and end-of-day reports.
"""
