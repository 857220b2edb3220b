"""
Interfaces Layer

Entry points exposed by the process.
"""
