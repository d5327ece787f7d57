"""
HTTP API clients.
"""

from healthteam_qa.clients.ehr_bridge import ApiExchange, EhrBridgeClient, open_ehr_client

__all__ = [
    "ApiExchange",
    "EhrBridgeClient",
    "open_ehr_client",
]
