"""
CHASSIS - Property-Based Testing Suite

Property-based testing using Hypothesis to check the instance stack and
director registry invariants under arbitrary construction and disposal
orders.
"""
