# File: src/building_compliance/persistence/__init__.py
"""
Element persistence collaborator: the contract and its HTTP implementation.
"""

from building_compliance.persistence.api_client import ComplianceApiClient
from building_compliance.persistence.updater import ElementLocation, ElementUpdater, UpdateResult

__all__ = [
    "ComplianceApiClient",
    "ElementLocation",
    "ElementUpdater",
    "UpdateResult",
]
