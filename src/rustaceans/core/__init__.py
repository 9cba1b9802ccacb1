"""
Core domain models, integer primitives, and contracts.

This module contains the foundational building blocks that are independent
of the companion collection and of the rendering pipeline.
"""
