from .api_request import ApiRequest, PendingRequest
from .credentials import CredentialPair

__all__ = ["ApiRequest", "CredentialPair", "PendingRequest"]
