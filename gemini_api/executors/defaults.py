"""Default executor configuration.

This module defines the default HTTP executor implementation used by the
Gemini SDK when no custom executor is provided.
"""

from typing import Type

from gemini_api.executors.httpx import HttpxHttpExecutor
from gemini_api.executors.interface import HttpExecutor

DEFAULT_HTTP_EXECUTOR: Type[HttpExecutor] = HttpxHttpExecutor
