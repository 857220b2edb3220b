"""
Application Layer

Use cases orchestrating the domain through its ports.
"""
