"""
Test package for the business dashboard backend application.

This package contains test suites for:
- Authentication and role gating
- Employee and client management
- Employee <-> client assignment bookkeeping
- Work sessions, todos and completed work
- Daily reports and the admin dashboard
"""
