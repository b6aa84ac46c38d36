from gemini_api.executors.defaults import DEFAULT_HTTP_EXECUTOR
from gemini_api.executors.httpx import HttpxHttpExecutor
from gemini_api.executors.interface import HttpExecutor, HttpResponse
from gemini_api.executors.requests import RequestsHttpExecutor

__all__ = [
    "HttpExecutor",
    "HttpResponse",
    "HttpxHttpExecutor",
    "RequestsHttpExecutor",
    "DEFAULT_HTTP_EXECUTOR",
]
