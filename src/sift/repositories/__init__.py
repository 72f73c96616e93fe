"""Store interfaces for sift.

This package contains the abstract base classes that define the contract
for the transactional task store. Implementations (adapters) are in
``sift.adapters``.
"""

from .repository import Store, Transaction

__all__ = [
    "Store",
    "Transaction",
]
