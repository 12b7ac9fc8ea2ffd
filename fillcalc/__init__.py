"""
Material volume calculator.

Computes how much fill material is needed for the space between a container
and an optional inner void, and keeps the form inputs in shareable URL
query parameters.
"""
