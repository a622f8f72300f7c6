"""
Core domain models, calendar primitives, and contracts.

This module contains the foundational building blocks of xbdate: the UTC
date value, calendar arithmetic with overflow, precision-aware comparison,
and the declarative constraint contract.
"""
