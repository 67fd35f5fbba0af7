"""Infrastructure module.

Configuration, database wiring, and logging setup.
"""
