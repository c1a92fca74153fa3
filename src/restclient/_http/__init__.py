from ._handle import RestRequestAsyncHandle
from ._http import Http, HttpFactory, ResponseAction

__all__ = [
    "Http",
    "HttpFactory",
    "ResponseAction",
    "RestRequestAsyncHandle",
]
