"""Routing — ordered route registry, pattern compiler, and match types.

Routes are compiled on registration and matched in registration order.
"""
