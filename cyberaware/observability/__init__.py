"""
Observability module for cyberaware.

This module provides:
- Metrics collection with Prometheus
"""

__all__ = ["metrics"]
