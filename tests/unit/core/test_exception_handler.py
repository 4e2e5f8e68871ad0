"""Unit tests for the project-wide DRF exception handler."""

from __future__ import annotations

import pytest
from rest_framework.exceptions import MethodNotAllowed, ParseError, ValidationError

from modules.core.exceptions import message_exception_handler

pytestmark = pytest.mark.unit


class TestMessageExceptionHandler:
    def test_parse_error(self):
        response = message_exception_handler(ParseError("Malformed request."), {})
        assert response.status_code == 400
        assert response.data == {"message": "Malformed request."}

    def test_method_not_allowed(self):
        response = message_exception_handler(MethodNotAllowed("GET"), {})
        assert response.status_code == 405
        assert response.data == {"message": 'Method "GET" not allowed.'}

    def test_field_errors_name_the_field(self):
        exc = ValidationError({"price": ["A valid number is required."]})
        response = message_exception_handler(exc, {})
        assert response.status_code == 400
        assert response.data == {"message": "price: A valid number is required."}

    def test_unknown_exceptions_are_not_handled(self):
        assert message_exception_handler(RuntimeError("boom"), {}) is None
