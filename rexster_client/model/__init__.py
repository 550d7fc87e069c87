from .client_model import ClientConfig, PagingFilter, RequestRecord, ResponseState

__all__ = [
    'ClientConfig',
    'PagingFilter',
    'RequestRecord',
    'ResponseState',
]
