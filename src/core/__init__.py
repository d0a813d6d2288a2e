"""
Core domain models, contracts and logging.

This module contains the foundational building blocks that are independent
of external systems (gauges, subgraph, price feeds, etc.).
"""
