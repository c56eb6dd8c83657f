"""
Adapters for FloodGuard hexagonal architecture.

This module contains the concrete implementations of the ports:
storage backends and alert dispatchers.
"""
