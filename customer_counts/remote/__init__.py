from customer_counts.remote.gateway import RemoteGateway
from customer_counts.remote.mock_backend import MockCustomerBackend

__all__ = ["RemoteGateway", "MockCustomerBackend"]
