"""
Application Layer for progression analytics.

This package contains:
- ports/: Abstract repository interfaces (what the domain needs)
- exceptions: Errors shared by application and infrastructure layers
"""
