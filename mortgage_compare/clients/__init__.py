from mortgage_compare.clients.downstream import DownstreamError, ServiceClient

__all__ = ["DownstreamError", "ServiceClient"]
