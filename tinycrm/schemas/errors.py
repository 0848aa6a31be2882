"""OpenAPI response declarations for problem-detail errors."""

from tinycrm.exceptions import ProblemDetail

_PROBLEM = {"model": ProblemDetail, "content": {"application/problem+json": {}}}

BAD_REQUEST = {400: {**_PROBLEM, "description": "Malformed input or invalid id"}}
UNAUTHORIZED = {401: {**_PROBLEM, "description": "Missing or invalid credentials"}}
NOT_FOUND = {404: {**_PROBLEM, "description": "Unknown id"}}
SERVER_ERROR = {500: {**_PROBLEM, "description": "Store failure or integrity violation"}}

RECORD_RESPONSES = {**BAD_REQUEST, **UNAUTHORIZED, **NOT_FOUND, **SERVER_ERROR}
COLLECTION_RESPONSES = {**BAD_REQUEST, **UNAUTHORIZED, **SERVER_ERROR}
