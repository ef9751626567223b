"""
                        Services Module

Contains the persistence gateway and the notification layer.

Services:
    - store: parameterized access to users and orders
    - notifications: mail transports (Mock / SendGrid) and the dispatcher
"""

from cookhouse.services.store import StoreGateway

__all__ = ["StoreGateway"]
