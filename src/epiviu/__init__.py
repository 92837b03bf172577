"""Epiviu - sector visitation tracker.

Feature modules (staff, sectors, visits, reports) each keep a thin Flask
controller on top of service and repository layers.
"""
