"""Interceptor pipeline and built-in request interceptors."""

from resilient_http.interceptors.auth import BearerTokenInterceptor, is_internal_endpoint
from resilient_http.interceptors.chain import Interceptor, InterceptorChain
from resilient_http.interceptors.request_id import RequestIdInterceptor

__all__ = [
    "BearerTokenInterceptor",
    "Interceptor",
    "InterceptorChain",
    "RequestIdInterceptor",
    "is_internal_endpoint",
]
